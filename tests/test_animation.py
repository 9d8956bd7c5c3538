import pytest

from duckyland.animation import (
    PlayerAnimation,
    PlayerAnimationState,
    animation_state_for,
    should_play_step,
)
from duckyland.movement import Vec2


def test_new_animation_is_idle_at_first_frame():
    anim = PlayerAnimation()
    assert anim.state is PlayerAnimationState.IDLING
    assert anim.frame == 0
    assert anim.atlas_index() == 0
    assert anim.changed() is False


def test_idle_frame_does_not_advance_before_interval():
    anim = PlayerAnimation()
    anim.update_timer(0.25)
    assert anim.changed() is False
    assert anim.frame == 0


def test_idle_frames_cycle():
    anim = PlayerAnimation()
    anim.update_timer(PlayerAnimation.IDLE_INTERVAL)
    assert anim.changed() is True
    assert anim.frame == 1
    assert anim.atlas_index() == 1
    anim.update_timer(PlayerAnimation.IDLE_INTERVAL)
    assert anim.frame == 0


def test_walking_frames_cycle_through_second_row():
    anim = PlayerAnimation()
    anim.update_state(PlayerAnimationState.WALKING)
    assert anim.atlas_index() == 6
    seen = []
    for _ in range(PlayerAnimation.WALKING_FRAMES):
        anim.update_timer(PlayerAnimation.WALKING_INTERVAL)
        seen.append(anim.atlas_index())
    assert sorted(seen) == list(range(6, 12))
    assert anim.frame == 0


def test_same_state_keeps_progress():
    anim = PlayerAnimation()
    anim.update_timer(0.25)
    anim.update_state(PlayerAnimationState.IDLING)
    anim.update_timer(0.25)
    assert anim.changed() is True
    assert anim.frame == 1


def test_state_change_resets():
    anim = PlayerAnimation()
    anim.update_timer(PlayerAnimation.IDLE_INTERVAL)
    assert anim.frame == 1
    anim.update_state(PlayerAnimationState.WALKING)
    assert anim.frame == 0
    assert anim.changed() is False
    assert anim.state is PlayerAnimationState.WALKING


@pytest.mark.parametrize(
    "intent, expected",
    [
        (Vec2(0.0, 0.0), PlayerAnimationState.IDLING),
        (Vec2(1.0, 0.0), PlayerAnimationState.WALKING),
        (Vec2(0.0, -1.0), PlayerAnimationState.WALKING),
    ],
)
def test_animation_state_for(intent, expected):
    assert animation_state_for(intent) is expected


def test_step_plays_on_walking_frames_two_and_five():
    anim = PlayerAnimation()
    anim.update_state(PlayerAnimationState.WALKING)
    steps = []
    for _ in range(PlayerAnimation.WALKING_FRAMES):
        anim.update_timer(PlayerAnimation.WALKING_INTERVAL)
        if should_play_step(anim):
            steps.append(anim.frame)
    assert steps == [2, 5]


def test_no_step_while_idle():
    anim = PlayerAnimation()
    results = []
    for _ in range(6):
        anim.update_timer(PlayerAnimation.IDLE_INTERVAL)
        results.append(should_play_step(anim))
    assert results == [False] * 6