# duckyland

A small 2D game built on pygame. A pixel-art duck walks around a world that
wraps at the window edges. The game starts on a splash screen, moves to a title
screen with a main menu, and from there into gameplay. It also has credits,
settings and pause menus.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Playing

```
duckyland
```

Options:

- `--assets DIR` — the directory holding the game's assets (default `assets`).
- `--mute` — play without sound.
- `--verbose` — log screen, menu and pause transitions.

If pygame's mixer cannot be started, a warning is logged and the game plays
without sound.

The game loads its images and sounds from the asset directory. The expected
layout is:

```
images/ducky.png
images/splash.png
audio/music/Fluffing A Duck.ogg
audio/music/Monkeys Spinning Monkeys.ogg
audio/sound_effects/step1.ogg … step4.ogg
audio/sound_effects/button_hover.ogg
audio/sound_effects/button_click.ogg
```

`ducky.png` is a sprite sheet of 32×32 tiles with 1 pixel of padding, six
columns and two rows: the first row holds the idle frames, the second the walk
cycle.

Controls:

- **W A S D** or the **arrow keys** move the duck. Diagonal movement runs at the
  same speed as straight movement.
- **P** or **Escape** pauses the game and opens the pause menu. **P** or
  **Escape** closes it again.
- **Escape** skips the splash screen and leaves the credits and settings menus.
- **Backquote** (`` ` ``) toggles the UI debug overlay, which outlines every UI
  element.
- The mouse hovers and clicks the menu buttons. *Exit* in the main menu, or
  closing the window, quits.

In the settings menu, the **-** and **+** buttons change the master volume in
steps of 10%, from 0% to 300%. The change also applies to sounds already
playing.

If the assets are still loading when you press *Play*, a loading screen is
shown until they are ready.

## Using it from code

The pieces of the game can be used on their own:

- `duckyland.timer` — `Timer` and `TimerMode`, timers ticked by frame deltas in
  seconds.
- `duckyland.states` — the `Screen` and `Menu` enums, `AppSystems`, and
  `State`, which queues a change with `set` and applies it with `apply`,
  returning a `Transition` or `None`.
- `duckyland.asset_tracking` — `AssetServer`, `Handle` and `ResourceHandles`,
  which calls a resource's insert function once all its handles are loaded.
- `duckyland.audio` — `music`, `sound_effect` and `AudioMixer`, which keeps
  track of playing sounds and applies the global volume to them.
- `duckyland.ui` — `Node`, `layout` and `hit_test`, a small UI tree with
  row, column and grid layout.
- `duckyland.theme` — colours, `InteractionPalette` and the widgets
  `ui_root`, `header`, `label`, `button` and `button_small`.
- `duckyland.movement` — `Vec2`, `MovementController`, `apply_movement` and
  `screen_wrap`.
- `duckyland.animation` — `PlayerAnimation`, the duck's idle and walk cycles.
- `duckyland.player` — `Player`, `PlayerAssets`, `directional_intent` and
  `atlas_rect`.
- `duckyland.level` — `LevelAssets`, `Level` and `spawn_level`.
- `duckyland.menus` — the menu builders and the volume helpers
  `lower_volume`, `raise_volume` and `volume_label`.
- `duckyland.screens` — the splash, loading and pause-overlay UI,
  `FadeInOut` and `gameplay_key_request`.
- `duckyland.app` — `Game`, which can be driven one step at a time with
  `Game.update(delta, pressed)`, `Game.handle_key` and `Game.handle_click`
  without opening a window, and `main`, the command above.

## What it does not do

- Text is drawn with pygame's default font; there are no font assets.
- Assets are read once they exist; changed files are not reloaded while the
  game runs.
- There is no save state: volume and progress are lost when the game exits.