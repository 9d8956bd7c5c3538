"""Loading assets and publishing resources once their files are ready."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Deque, Iterable, Optional, Tuple


@dataclass(frozen=True)
class Handle:
    """A reference to an asset by its path under the asset root."""

    path: str


def _read_bytes(path: Path) -> bytes:
    return path.read_bytes()


class AssetServer:
    """Loads asset files from a root directory, retrying until they are available."""

    def __init__(self, root: Path | str = "assets", loader: Optional[Callable[[Path], Any]] = None) -> None:
        self.root = Path(root)
        self.loader = loader or _read_bytes
        self._loaded: dict[Handle, Any] = {}

    def load(self, path: str) -> Handle:
        handle = Handle(path)
        self._try_load(handle)
        return handle

    def _try_load(self, handle: Handle) -> bool:
        if handle in self._loaded:
            return True
        try:
            self._loaded[handle] = self.loader(self.root / handle.path)
        except OSError:
            return False
        return True

    def get(self, handle: Handle) -> Any:
        """Return the loaded data; raise KeyError if it is not loaded."""
        if not self._try_load(handle):
            raise KeyError(handle.path)
        return self._loaded[handle]

    def is_loaded_with_dependencies(self, handle: Handle | Iterable[Handle]) -> bool:
        handles = [handle] if isinstance(handle, Handle) else list(handle)
        return all([self._try_load(h) for h in handles])


class ResourceHandles:
    """Queue of resources waiting for their assets to finish loading."""

    def __init__(self) -> None:
        self.waiting: Deque[Tuple[Tuple[Handle, ...], Callable[[], None]]] = deque()
        self.finished: list[Tuple[Handle, ...]] = []

    def request(self, handles: Iterable[Handle], insert: Callable[[], None]) -> None:
        """Call ``insert`` once every handle is loaded."""
        self.waiting.append((tuple(handles), insert))

    def update(self, server: AssetServer) -> None:
        """Cycle once through the waiting queue, inserting what is ready."""
        for _ in range(len(self.waiting)):
            handles, insert = self.waiting.popleft()
            if server.is_loaded_with_dependencies(handles):
                insert()
                self.finished.append(handles)
            else:
                self.waiting.append((handles, insert))

    def is_all_done(self) -> bool:
        return not self.waiting