"""Music and sound-effect playback with a global volume."""

from __future__ import annotations

import enum
import io
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol

from duckyland.asset_tracking import Handle


class AudioCategory(enum.Enum):
    MUSIC = "music"
    SOUND_EFFECT = "sound_effect"


class PlaybackMode(enum.Enum):
    LOOP = "loop"
    DESPAWN = "despawn"


@dataclass(eq=False)
class AudioInstance:
    handle: Handle
    mode: PlaybackMode
    category: AudioCategory
    volume: float = 1.0
    sink: Any = None


def music(handle: Handle) -> AudioInstance:
    """A looping music instance."""
    return AudioInstance(handle, PlaybackMode.LOOP, AudioCategory.MUSIC)


def sound_effect(handle: Handle) -> AudioInstance:
    """A one-shot sound effect, removed when it ends."""
    return AudioInstance(handle, PlaybackMode.DESPAWN, AudioCategory.SOUND_EFFECT)


class AudioBackend(Protocol):
    def play(self, handle: Handle, loop: bool, volume: float) -> Any: ...
    def set_volume(self, sink: Any, volume: float) -> None: ...
    def stop(self, sink: Any) -> None: ...
    def is_playing(self, sink: Any) -> bool: ...


class NullAudioBackend:
    """A silent backend; looping sounds play forever, others end at once."""

    def play(self, handle: Handle, loop: bool, volume: float) -> Any:
        return {"loop": loop, "volume": volume}

    def set_volume(self, sink: Any, volume: float) -> None:
        sink["volume"] = volume

    def stop(self, sink: Any) -> None:
        sink["loop"] = False

    def is_playing(self, sink: Any) -> bool:
        return sink["loop"]


class PygameAudioBackend:
    """Plays sounds through pygame's mixer, reading data with ``fetch``."""

    def __init__(self, fetch: Callable[[Handle], bytes]) -> None:
        import pygame

        self._pygame = pygame
        self._fetch = fetch
        self._sounds: dict[Handle, Any] = {}
        if not pygame.mixer.get_init():
            pygame.mixer.init()

    def _sound(self, handle: Handle) -> Any:
        if handle not in self._sounds:
            self._sounds[handle] = self._pygame.mixer.Sound(file=io.BytesIO(self._fetch(handle)))
        return self._sounds[handle]

    def play(self, handle: Handle, loop: bool, volume: float) -> Any:
        channel = self._sound(handle).play(loops=-1 if loop else 0)
        if channel is not None:
            channel.set_volume(min(max(volume, 0.0), 1.0))
        return channel

    def set_volume(self, sink: Any, volume: float) -> None:
        if sink is not None:
            sink.set_volume(min(max(volume, 0.0), 1.0))

    def stop(self, sink: Any) -> None:
        if sink is not None:
            sink.stop()

    def is_playing(self, sink: Any) -> bool:
        return sink is not None and sink.get_busy()


class AudioMixer:
    """Tracks playing instances and applies the global volume to them."""

    def __init__(self, backend: Optional[AudioBackend] = None) -> None:
        self.backend = backend if backend is not None else NullAudioBackend()
        self.global_volume = 1.0
        self.instances: list[AudioInstance] = []

    def spawn(self, instance: AudioInstance) -> AudioInstance:
        instance.sink = self.backend.play(
            instance.handle, instance.mode is PlaybackMode.LOOP, self.global_volume * instance.volume
        )
        self.instances.append(instance)
        return instance

    def stop(self, instance: AudioInstance) -> None:
        if instance in self.instances:
            self.backend.stop(instance.sink)
            self.instances.remove(instance)

    def set_global_volume(self, volume: float) -> None:
        """Change the global volume, including for sounds already playing."""
        self.global_volume = volume
        for instance in self.instances:
            self.backend.set_volume(instance.sink, volume * instance.volume)

    def update(self) -> None:
        """Drop one-shot sounds that have finished."""
        self.instances = [
            i
            for i in self.instances
            if i.mode is PlaybackMode.LOOP or self.backend.is_playing(i.sink)
        ]