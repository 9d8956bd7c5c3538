import pytest

from duckyland.asset_tracking import Handle, ResourceHandles
from duckyland.audio import AudioCategory, AudioMixer, PlaybackMode
from duckyland.menus import (
    CREDITS_MUSIC_PATH,
    MAX_VOLUME,
    MENU_Z_INDEX,
    MIN_VOLUME,
    build_menu,
    credits_menu,
    grid,
    lower_volume,
    main_menu,
    pause_menu,
    raise_volume,
    settings_back_target,
    settings_menu,
    volume_label,
)
from duckyland.states import Menu, Screen, State
from duckyland.ui import JustifySelf, Rect, hit_test, layout


class FakeGame:
    def __init__(self, screen=Screen.TITLE, credits_music=None):
        self.screen = State(screen)
        self.menu = State(Menu.NONE)
        self.resources = ResourceHandles()
        self.mixer = AudioMixer()
        self.credits_music = credits_music
        self.scoped = []
        self.exited = False

    def play_scoped(self, instance, scope):
        self.mixer.spawn(instance)
        self.scoped.append((instance, scope))
        return instance

    def exit(self):
        self.exited = True


def find_button(root, text):
    for node in root.walk():
        if node.on_click is not None and any(c.text == text for c in node.children):
            return node
    raise LookupError(text)


def click(root, text):
    find_button(root, text).on_click()


def button_texts(root):
    return [
        child.text
        for node in root.walk()
        if node.on_click is not None
        for child in node.children
        if child.text is not None
    ]


def test_lower_volume_clamps_at_minimum():
    assert lower_volume(0.05) == MIN_VOLUME
    assert lower_volume(MIN_VOLUME) == MIN_VOLUME


def test_raise_volume_clamps_at_maximum():
    assert raise_volume(2.95) == MAX_VOLUME
    assert raise_volume(MAX_VOLUME) == MAX_VOLUME


@pytest.mark.parametrize("volume", [0.5, 1.0, 2.0])
def test_raise_then_lower_round_trips(volume):
    assert lower_volume(raise_volume(volume)) == pytest.approx(volume)
    assert raise_volume(volume) > volume


def test_volume_label_is_padded_percentage():
    assert volume_label(1.0) == "100%"
    assert volume_label(0.0) == "  0%"
    assert len(volume_label(0.5)) == 4


@pytest.mark.parametrize(
    "screen, expected",
    [
        (Screen.TITLE, Menu.MAIN),
        (Screen.GAMEPLAY, Menu.PAUSE),
        (Screen.LOADING, Menu.PAUSE),
        (Screen.SPLASH, Menu.PAUSE),
    ],
)
def test_settings_back_target(screen, expected):
    assert settings_back_target(screen) is expected


def test_grid_alternates_alignment_and_keeps_order():
    node = grid([("a", "b"), ("c", "d")])
    assert [c.text for c in node.children] == ["a", "b", "c", "d"]
    assert [c.justify_self for c in node.children] == [
        JustifySelf.END,
        JustifySelf.START,
        JustifySelf.END,
        JustifySelf.START,
    ]
    assert node.grid_columns == (400.0, 400.0)


def test_grid_rejects_rows_of_wrong_length():
    with pytest.raises(ValueError):
        grid([("only one",)])


def test_main_menu_buttons():
    root = main_menu(FakeGame())
    assert root.name == "Main Menu"
    assert root.z_index == MENU_Z_INDEX
    assert button_texts(root) == ["Play", "Settings", "Credits", "Exit"]


def test_play_goes_to_gameplay_when_assets_ready():
    game = FakeGame()
    click(main_menu(game), "Play")
    assert game.screen.pending is Screen.GAMEPLAY


def test_play_goes_to_loading_when_assets_pending():
    game = FakeGame()
    game.resources.request([Handle("missing.ogg")], lambda: None)
    click(main_menu(game), "Play")
    assert game.screen.pending is Screen.LOADING


def test_main_menu_navigation_and_exit():
    game = FakeGame()
    root = main_menu(game)
    click(root, "Settings")
    assert game.menu.pending is Menu.SETTINGS
    click(root, "Credits")
    assert game.menu.pending is Menu.CREDITS
    click(root, "Exit")
    assert game.exited is True


def test_credits_menu_plays_scoped_music():
    game = FakeGame(credits_music=Handle(CREDITS_MUSIC_PATH))
    credits_menu(game)
    assert len(game.scoped) == 1
    instance, scope = game.scoped[0]
    assert scope is Menu.CREDITS
    assert instance.category is AudioCategory.MUSIC
    assert instance.mode is PlaybackMode.LOOP
    assert instance.handle.path == CREDITS_MUSIC_PATH


def test_credits_menu_without_music_plays_nothing():
    game = FakeGame()
    credits_menu(game)
    assert game.scoped == []
    assert game.mixer.instances == []


def test_credits_menu_contents_and_back():
    game = FakeGame()
    root = credits_menu(game)
    texts = [n.text for n in root.walk() if n.text is not None]
    assert "Created by" in texts
    assert "Joe Shmoe" in texts
    assert "Ducky sprite" in texts
    click(root, "Back")
    assert game.menu.pending is Menu.MAIN


def test_settings_raise_updates_mixer_and_label():
    game = FakeGame()
    root = settings_menu(game)
    volume_node = root.find("Global Volume Label")
    assert volume_node.text == volume_label(1.0)
    click(root, "+")
    assert game.mixer.global_volume == pytest.approx(1.1)
    assert volume_node.text == volume_label(game.mixer.global_volume)


def test_settings_lower_stops_at_minimum():
    game = FakeGame()
    game.mixer.set_global_volume(0.0)
    root = settings_menu(game)
    click(root, "-")
    assert game.mixer.global_volume == MIN_VOLUME
    assert root.find("Global Volume Label").text == volume_label(MIN_VOLUME)


@pytest.mark.parametrize(
    "screen, expected", [(Screen.TITLE, Menu.MAIN), (Screen.GAMEPLAY, Menu.PAUSE)]
)
def test_settings_back_button(screen, expected):
    game = FakeGame(screen=screen)
    click(settings_menu(game), "Back")
    assert game.menu.pending is expected


def test_pause_menu_actions():
    game = FakeGame(screen=Screen.GAMEPLAY)
    root = pause_menu(game)
    assert root.find("Header").text == "Game paused"
    assert button_texts(root) == ["Continue", "Settings", "Quit to title"]
    click(root, "Settings")
    assert game.menu.pending is Menu.SETTINGS
    click(root, "Continue")
    assert game.menu.pending is Menu.NONE
    click(root, "Quit to title")
    assert game.screen.pending is Screen.TITLE


@pytest.mark.parametrize(
    "menu, name",
    [
        (Menu.MAIN, "Main Menu"),
        (Menu.CREDITS, "Credits Menu"),
        (Menu.SETTINGS, "Settings Menu"),
        (Menu.PAUSE, "Pause Menu"),
    ],
)
def test_build_menu_dispatches(menu, name):
    assert build_menu(menu, FakeGame()).name == name


def test_build_menu_none_has_no_ui():
    assert build_menu(Menu.NONE, FakeGame()) is None


def test_laid_out_button_is_hit_at_its_centre():
    root = main_menu(FakeGame())
    layout(root, Rect(0, 0, 1280, 720))
    play = find_button(root, "Play")
    assert hit_test(root, play.rect.center) is play