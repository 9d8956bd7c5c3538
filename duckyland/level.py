"""The main gameplay level."""

from __future__ import annotations

from dataclasses import dataclass

from duckyland.asset_tracking import AssetServer, Handle
from duckyland.audio import AudioInstance, AudioMixer, music as music_instance
from duckyland.player import Player, PlayerAssets

PLAYER_MAX_SPEED = 400.0


@dataclass(frozen=True)
class LevelAssets:
    music: Handle

    @classmethod
    def load(cls, server: AssetServer) -> LevelAssets:
        return cls(music=server.load("audio/music/Fluffing A Duck.ogg"))

    @property
    def handles(self) -> tuple[Handle, ...]:
        return (self.music,)


@dataclass(eq=False)
class Level:
    """A spawned level: the player and the gameplay music."""

    player: Player
    music: AudioInstance
    name: str = "Level"

    def despawn(self, mixer: AudioMixer) -> None:
        """Stop everything the level started."""
        mixer.stop(self.music)


def spawn_level(level_assets: LevelAssets, player_assets: PlayerAssets, mixer: AudioMixer) -> Level:
    """Create the player and start the level's music."""
    player = Player(PLAYER_MAX_SPEED, player_assets)
    track = mixer.spawn(music_instance(level_assets.music))
    return Level(player=player, music=track)