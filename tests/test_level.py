import pytest

from duckyland.asset_tracking import AssetServer, Handle
from duckyland.audio import AudioCategory, AudioMixer, PlaybackMode
from duckyland.level import LevelAssets, spawn_level
from duckyland.player import PlayerAssets


@pytest.fixture
def server(tmp_path):
    return AssetServer(tmp_path, loader=lambda path: b"")


def test_level_assets_path(server):
    assets = LevelAssets.load(server)
    assert assets.music == Handle("audio/music/Fluffing A Duck.ogg")
    assert assets.handles == (assets.music,)


def test_spawn_level_starts_music_and_player(server):
    mixer = AudioMixer()
    level = spawn_level(LevelAssets.load(server), PlayerAssets.load(server), mixer)
    assert level.name == "Level"
    assert level.player.controller.max_speed == 400.0
    assert mixer.instances == [level.music]
    assert level.music.mode is PlaybackMode.LOOP
    assert level.music.category is AudioCategory.MUSIC
    assert level.music.handle.path == "audio/music/Fluffing A Duck.ogg"


def test_despawn_stops_music(server):
    mixer = AudioMixer()
    level = spawn_level(LevelAssets.load(server), PlayerAssets.load(server), mixer)
    level.despawn(mixer)
    assert mixer.instances == []