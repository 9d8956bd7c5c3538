"""The game: screens, menus, gameplay and the main loop."""

from __future__ import annotations

import argparse
import io
import logging
from pathlib import Path
from typing import AbstractSet, Any, Callable, Optional

from duckyland.asset_tracking import AssetServer, Handle, ResourceHandles
from duckyland.audio import AudioBackend, AudioInstance, AudioMixer, PygameAudioBackend, sound_effect
from duckyland.level import Level, LevelAssets, spawn_level
from duckyland.menus import CREDITS_MUSIC_PATH, build_menu, settings_back_target
from duckyland.player import PlayerAssets, atlas_rect
from duckyland.screens import (
    SPLASH_BACKGROUND_COLOR,
    SPLASH_DURATION_SECS,
    SPLASH_IMAGE_PATH,
    FadeInOut,
    gameplay_key_request,
    loading_screen,
    pause_overlay,
    splash_screen,
)
from duckyland.states import Menu, Screen, State, Transition
from duckyland.theme import Interaction
from duckyland.timer import Timer, TimerMode
from duckyland.ui import Node, Rect, hit_test, layout

logger = logging.getLogger(__name__)

WINDOW_TITLE = "2d Game Template1"
DEFAULT_WINDOW_SIZE = (1280.0, 720.0)
TOGGLE_DEBUG_KEY = "`"
HOVER_SOUND_PATH = "audio/sound_effects/button_hover.ogg"
CLICK_SOUND_PATH = "audio/sound_effects/button_click.ogg"
FRAMES_PER_SECOND = 60
_MAX_TRANSITION_PASSES = 8


class Game:
    """All game state, advanced one frame at a time."""

    def __init__(
        self,
        asset_root: Path | str = "assets",
        audio_backend: Optional[AudioBackend] = None,
    ) -> None:
        self.server = AssetServer(asset_root)
        self.mixer = AudioMixer(audio_backend)
        self.resources = ResourceHandles()
        self.screen: State[Screen] = State(Screen.SPLASH)
        self.menu: State[Menu] = State(Menu.NONE)
        self.pause: State[bool] = State(False)
        self.window_size = DEFAULT_WINDOW_SIZE
        self.running = True
        self.debug_ui = False

        self.level_assets: Optional[LevelAssets] = None
        self.player_assets: Optional[PlayerAssets] = None
        self.credits_music: Optional[Handle] = None
        self.interaction_sounds: Optional[tuple[Handle, Handle]] = None

        self.level: Optional[Level] = None
        self.screen_ui: Optional[Node] = None
        self.menu_ui: Optional[Node] = None
        self.pause_overlay: Optional[Node] = None
        self.fade: Optional[FadeInOut] = None
        self.splash_timer: Optional[Timer] = None
        self.splash_image: Optional[Handle] = None
        self.splash_alpha = 0.0

        self._scoped_audio: list[tuple[AudioInstance, Menu]] = []
        self._hovered: Optional[Node] = None
        self._surfaces: dict[Handle, Any] = {}
        self._fonts: dict[int, Any] = {}

        self._request_resources()
        self._enter_screen(Screen.SPLASH)

    # -- resources -------------------------------------------------------

    def _request_resources(self) -> None:
        level_assets = LevelAssets.load(self.server)
        player_assets = PlayerAssets.load(self.server)
        credits_music = self.server.load(CREDITS_MUSIC_PATH)
        sounds = (self.server.load(HOVER_SOUND_PATH), self.server.load(CLICK_SOUND_PATH))

        def insert_level() -> None:
            self.level_assets = level_assets

        def insert_player() -> None:
            self.player_assets = player_assets

        def insert_credits() -> None:
            self.credits_music = credits_music

        def insert_interaction() -> None:
            self.interaction_sounds = sounds

        self.resources.request(level_assets.handles, insert_level)
        self.resources.request(player_assets.handles, insert_player)
        self.resources.request((credits_music,), insert_credits)
        self.resources.request(sounds, insert_interaction)

    # -- hooks used by menus ---------------------------------------------

    def play_scoped(self, instance: AudioInstance, scope: Menu) -> AudioInstance:
        """Play ``instance`` until the menu ``scope`` is left."""
        self.mixer.spawn(instance)
        self._scoped_audio.append((instance, scope))
        return instance

    def exit(self) -> None:
        self.running = False

    # -- input -----------------------------------------------------------

    def handle_key(self, key: str) -> None:
        """React to a key having just been pressed."""
        key = key.lower()
        screen, menu = self.screen.current, self.menu.current

        if key == TOGGLE_DEBUG_KEY:
            self.debug_ui = not self.debug_ui

        if key == "escape":
            if menu is Menu.CREDITS:
                self.menu.set(Menu.MAIN)
            elif menu is Menu.PAUSE:
                self.menu.set(Menu.NONE)
            elif menu is Menu.SETTINGS:
                self.menu.set(settings_back_target(screen))
            if screen is Screen.SPLASH:
                self.screen.set(Screen.TITLE)

        request = gameplay_key_request(screen, menu, key)
        if request is Menu.PAUSE:
            self.pause.set(True)
            self.pause_overlay = pause_overlay()
            self.menu.set(Menu.PAUSE)
        elif request is Menu.NONE:
            self.menu.set(Menu.NONE)

    def handle_click(self, position: tuple[float, float]) -> bool:
        """Click at ``position``; return whether a button's action ran."""
        target = self._pick(position)
        if target is None:
            return False
        if target.interaction is not None:
            if self.interaction_sounds is not None:
                self.mixer.spawn(sound_effect(self.interaction_sounds[1]))
            self._set_interaction(target, Interaction.HOVERED)
        if target.on_click is None:
            return False
        target.on_click()
        return True

    def _pointer_moved(self, position: tuple[float, float]) -> None:
        target = self._pick(position)
        if target is not None and target.interaction is None:
            target = None
        if target is self._hovered:
            return
        if self._hovered is not None:
            self._set_interaction(self._hovered, Interaction.NONE)
        if target is not None:
            self._set_interaction(target, Interaction.HOVERED)
            if self.interaction_sounds is not None:
                self.mixer.spawn(sound_effect(self.interaction_sounds[0]))
        self._hovered = target

    def _pointer_pressed(self, position: tuple[float, float]) -> None:
        target = self._pick(position)
        if target is not None and target.interaction is not None:
            self._set_interaction(target, Interaction.PRESSED)

    @staticmethod
    def _set_interaction(node: Node, interaction: Interaction) -> None:
        node.interaction = interaction
        if node.palette is not None:
            node.background = node.palette.color_for(interaction)

    def _layers(self) -> list[Node]:
        layers = [n for n in (self.screen_ui, self.pause_overlay, self.menu_ui) if n is not None]
        layers.sort(key=lambda n: n.z_index)
        bounds = Rect(0.0, 0.0, *self.window_size)
        for node in layers:
            layout(node, bounds)
        return layers

    def _pick(self, position: tuple[float, float]) -> Optional[Node]:
        for node in reversed(self._layers()):
            hit = hit_test(node, position)
            if hit is not None:
                return hit
        return None

    # -- frame -----------------------------------------------------------

    def update(self, delta: float, pressed: AbstractSet[str] = frozenset()) -> list[Transition[Any]]:
        """Advance one frame of ``delta`` seconds with the keys held in ``pressed``."""
        self.resources.update(self.server)
        playing = not self.pause.current
        player = self.level.player if self.level is not None else None
        splash = self.screen.current is Screen.SPLASH

        if playing and player is not None:
            player.tick_timers(delta)
        if splash:
            if self.fade is not None:
                self.fade.tick(delta)
            if self.splash_timer is not None:
                self.splash_timer.tick(delta)

        if playing and player is not None:
            player.record_input(pressed)

        if playing and player is not None:
            step = player.update(delta, self.window_size)
            if step is not None and self.player_assets is not None:
                self.mixer.spawn(sound_effect(step))
        if splash:
            if self.fade is not None:
                self.splash_alpha = self.fade.alpha()
            if self.splash_timer is not None and self.splash_timer.just_finished():
                self.screen.set(Screen.TITLE)
        if self.screen.current is Screen.LOADING and self.resources.is_all_done():
            self.screen.set(Screen.GAMEPLAY)

        self.mixer.update()
        return self.apply_transitions()

    def apply_transitions(self) -> list[Transition[Any]]:
        """Apply requested state changes until none are left; return them in order."""
        applied: list[Transition[Any]] = []
        handlers: tuple[tuple[State[Any], Callable[[Transition[Any]], None], str], ...] = (
            (self.screen, self._on_screen, "Screen"),
            (self.menu, self._on_menu, "Menu"),
            (self.pause, self._on_pause, "Pause"),
        )
        for _ in range(_MAX_TRANSITION_PASSES):
            changed = False
            for state, handler, name in handlers:
                transition = state.apply()
                if transition is None:
                    continue
                logger.info("%s transition: %s => %s", name, transition.exited, transition.entered)
                handler(transition)
                applied.append(transition)
                changed = True
            if not changed:
                break
        return applied

    def _on_screen(self, transition: Transition[Screen]) -> None:
        self._exit_screen(transition.exited)
        self._enter_screen(transition.entered)

    def _exit_screen(self, screen: Screen) -> None:
        self.screen_ui = None
        if screen is Screen.SPLASH:
            self.splash_timer = None
            self.fade = None
        elif screen is Screen.TITLE:
            self.menu.set(Menu.NONE)
        elif screen is Screen.GAMEPLAY:
            self.menu.set(Menu.NONE)
            self.pause.set(False)
            if self.level is not None:
                self.level.despawn(self.mixer)
                self.level = None

    def _enter_screen(self, screen: Screen) -> None:
        if screen is Screen.SPLASH:
            self.screen_ui, self.fade = splash_screen()
            self.splash_timer = Timer.from_seconds(SPLASH_DURATION_SECS, TimerMode.ONCE)
            self.splash_image = self.server.load(SPLASH_IMAGE_PATH)
            self.splash_alpha = self.fade.alpha()
        elif screen is Screen.TITLE:
            self.menu.set(Menu.MAIN)
        elif screen is Screen.LOADING:
            self.screen_ui = loading_screen()
        elif screen is Screen.GAMEPLAY:
            if self.level_assets is None or self.player_assets is None:
                raise RuntimeError("level assets are not loaded")
            self.level = spawn_level(self.level_assets, self.player_assets, self.mixer)

    def _on_menu(self, transition: Transition[Menu]) -> None:
        self.menu_ui = None
        self._hovered = None
        keep = []
        for instance, scope in self._scoped_audio:
            if scope is transition.exited:
                self.mixer.stop(instance)
            else:
                keep.append((instance, scope))
        self._scoped_audio = keep

        if transition.entered is Menu.NONE:
            if self.screen.current is Screen.GAMEPLAY:
                self.pause.set(False)
        else:
            self.menu_ui = build_menu(transition.entered, self)

    def _on_pause(self, transition: Transition[bool]) -> None:
        if transition.exited:
            self.pause_overlay = None

    # -- main loop -------------------------------------------------------

    def run(self) -> None:
        """Open a window and play until the game exits."""
        import pygame

        pygame.init()
        try:
            pygame.display.set_mode(
                (int(self.window_size[0]), int(self.window_size[1])), pygame.RESIZABLE
            )
            pygame.display.set_caption(WINDOW_TITLE)
            clock = pygame.time.Clock()
            pressed: set[str] = set()
            while self.running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.exit()
                    elif event.type == pygame.VIDEORESIZE:
                        self.window_size = (float(event.w), float(event.h))
                    elif event.type == pygame.KEYDOWN:
                        name = pygame.key.name(event.key)
                        pressed.add(name)
                        self.handle_key(name)
                    elif event.type == pygame.KEYUP:
                        pressed.discard(pygame.key.name(event.key))
                    elif event.type == pygame.MOUSEMOTION:
                        self._pointer_moved(event.pos)
                    elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                        self._pointer_pressed(event.pos)
                    elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                        self.handle_click(event.pos)
                delta = clock.tick(FRAMES_PER_SECOND) / 1000.0
                self.update(delta, frozenset(pressed))
                self._draw(pygame, pygame.display.get_surface())
                pygame.display.flip()
        finally:
            pygame.quit()

    @staticmethod
    def _rgb(color: tuple[float, ...]) -> tuple[int, ...]:
        return tuple(round(min(max(c, 0.0), 1.0) * 255) for c in color)

    def _surface(self, pygame: Any, handle: Optional[Handle]) -> Any:
        if handle is None:
            return None
        if handle not in self._surfaces:
            try:
                data = self.server.get(handle)
                self._surfaces[handle] = pygame.image.load(io.BytesIO(data)).convert_alpha()
            except (KeyError, pygame.error):
                return None
        return self._surfaces[handle]

    def _font(self, pygame: Any, size: float) -> Any:
        key = int(size)
        if key not in self._fonts:
            self._fonts[key] = pygame.font.Font(None, key)
        return self._fonts[key]

    def _draw(self, pygame: Any, surface: Any) -> None:
        surface.fill(self._rgb(SPLASH_BACKGROUND_COLOR))
        if self.level is not None and self.player_assets is not None:
            self._draw_player(pygame, surface)
        for node in self._layers():
            self._draw_node(pygame, surface, node)

    def _draw_player(self, pygame: Any, surface: Any) -> None:
        assert self.level is not None and self.player_assets is not None
        player = self.level.player
        sheet = self._surface(pygame, self.player_assets.ducky)
        if sheet is None:
            return
        x, y, w, h = atlas_rect(player.atlas_index)
        try:
            frame = sheet.subsurface(pygame.Rect(x, y, w, h))
        except ValueError:
            return
        size = (int(w * player.scale), int(h * player.scale))
        frame = pygame.transform.scale(frame, size)
        if player.flip_x:
            frame = pygame.transform.flip(frame, True, False)
        win_w, win_h = self.window_size
        center = (win_w / 2 + player.position.x, win_h / 2 - player.position.y)
        surface.blit(frame, frame.get_rect(center=(int(center[0]), int(center[1]))))

    def _draw_node(self, pygame: Any, surface: Any, node: Node) -> None:
        if node.rect is None:
            return
        r = node.rect
        rect = pygame.Rect(int(r.x), int(r.y), int(r.w), int(r.h))
        if node.name == "Splash image":
            self._draw_splash_image(pygame, surface, rect)
        if node.background is not None:
            color = self._rgb(node.background)
            if len(color) == 4:
                layer = pygame.Surface(rect.size, pygame.SRCALPHA)
                layer.fill(color)
                surface.blit(layer, rect.topleft)
            else:
                radius = rect.h // 2 if node.rounded else 0
                pygame.draw.rect(surface, color, rect, border_radius=radius)
        if node.text:
            color = self._rgb(node.text_color or (1.0, 1.0, 1.0))
            image = self._font(pygame, node.font_size).render(node.text, True, color)
            surface.blit(image, image.get_rect(center=rect.center))
        if self.debug_ui:
            pygame.draw.rect(surface, (255, 0, 0), rect, 1)
        for child in node.children:
            self._draw_node(pygame, surface, child)

    def _draw_splash_image(self, pygame: Any, surface: Any, rect: Any) -> None:
        image = self._surface(pygame, self.splash_image)
        if image is None or image.get_width() == 0 or rect.w == 0:
            return
        height = int(image.get_height() * rect.w / image.get_width())
        scaled = pygame.transform.smoothscale(image, (rect.w, height))
        scaled.set_alpha(int(self.splash_alpha * 255))
        top = int((self.window_size[1] - height) / 2)
        surface.blit(scaled, (rect.x, top))


def _pygame_backend(root: Path) -> Optional[AudioBackend]:
    def fetch(handle: Handle) -> bytes:
        return (root / handle.path).read_bytes()

    try:
        return PygameAudioBackend(fetch)
    except (ImportError, RuntimeError) as error:
        logger.warning("audio disabled: %s", error)
        return None


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="duckyland", description="A small 2D duck game.")
    parser.add_argument("--assets", default="assets", help="directory holding the game's assets")
    parser.add_argument("--mute", action="store_true", help="play without sound")
    parser.add_argument("--verbose", action="store_true", help="log state transitions")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)
    root = Path(args.assets)
    backend = None if args.mute else _pygame_backend(root)
    Game(root, backend).run()
    return 0