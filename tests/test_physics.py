import math

import numpy as np
import pytest

from putt_input import on_pointer_down, on_pointer_move, on_pointer_up
from putt_physics import (
    WIN_MESSAGES,
    bounce_off_walls,
    check_hole_capture,
    score_text,
    step,
    win_message,
)
from putt_state import FRICTION, MIN_SPEED, RESTITUTION, SINK_FRAMES, SINK_SHRINK


def test_friction_never_speeds_the_ball_up(state):
    state.ball.x, state.ball.y = 200, 300
    state.ball.vel_x, state.ball.vel_y = 1.0, 0.5

    last = state.ball.speed
    for _ in range(200):
        step(state)
        assert state.ball.speed <= last
        last = state.ball.speed
    assert last == 0


def test_one_frame_moves_then_applies_friction(state):
    state.ball.x, state.ball.y = 200, 300
    state.ball.vel_x, state.ball.vel_y = 2.0, -3.0

    step(state)

    assert state.ball.x == pytest.approx(202)
    assert state.ball.y == pytest.approx(297)
    assert state.ball.vel_x == pytest.approx(2.0 * FRICTION)
    assert state.ball.vel_y == pytest.approx(-3.0 * FRICTION)


def test_crawling_ball_snaps_to_rest(state):
    state.ball.x, state.ball.y = 200, 300
    state.ball.vel_x, state.ball.vel_y = 0.07, -0.05

    step(state)

    assert (state.ball.vel_x, state.ball.vel_y) == (0, 0)


def test_slow_ball_comes_to_exact_rest(state):
    state.ball.x, state.ball.y = 200, 300
    state.ball.vel_x, state.ball.vel_y = MIN_SPEED * 0.9, -MIN_SPEED * 0.9
    assert not state.ball_is_moving()

    for _ in range(100):
        step(state)

    assert (state.ball.vel_x, state.ball.vel_y) == (0, 0)


def test_snap_is_per_axis(state):
    state.ball.x, state.ball.y = 200, 300
    state.ball.vel_x, state.ball.vel_y = 0.05, 3.0

    step(state)

    assert state.ball.vel_x == 0
    assert state.ball.vel_y == pytest.approx(3.0 * FRICTION)


def test_corner_bounces_off_both_walls(state):
    state.ball.x, state.ball.y = 10, 10
    state.ball.vel_x, state.ball.vel_y = -5.0, -5.0

    step(state)

    r = state.ball.radius
    assert (state.ball.x, state.ball.y) == (r, r)
    assert state.ball.vel_x == pytest.approx(5.0 * FRICTION * RESTITUTION)
    assert state.ball.vel_y == pytest.approx(5.0 * FRICTION * RESTITUTION)


def test_far_walls_reflect_inwards(state):
    ball = state.ball
    ball.x, ball.y = 398, 595
    ball.vel_x, ball.vel_y = 4.0, 6.0

    bounce_off_walls(ball, 400, 600)

    assert ball.x == pytest.approx(400 - ball.radius)
    assert ball.y == pytest.approx(600 - ball.radius)
    assert ball.vel_x == pytest.approx(-4.0 * RESTITUTION)
    assert ball.vel_y == pytest.approx(-6.0 * RESTITUTION)


def test_ball_always_stays_inside_the_field(state):
    rng = np.random.default_rng(1234)
    r = state.ball.radius
    for _ in range(500):
        state.reset()
        state.ball.x = rng.uniform(r, state.width - r)
        state.ball.y = rng.uniform(r, state.height - r)
        state.ball.vel_x, state.ball.vel_y = rng.uniform(-60, 60, size=2)

        for _ in range(5):
            step(state)
            assert state.ball.x - r >= 0
            assert state.ball.x + r <= state.width + 1e-9
            assert state.ball.y - r >= 0
            assert state.ball.y + r <= state.height + 1e-9


@pytest.mark.parametrize("speed, captured", [(11.8, False), (11.6, True), (0.0, True)])
def test_capture_speed_limit(state, speed, captured):
    state.ball.x, state.ball.y = state.hole.x, state.hole.y
    state.ball.vel_x = speed

    assert check_hole_capture(state) is captured
    assert state.sinking is captured


def test_capture_needs_the_ball_over_the_hole(state):
    hole = state.hole
    state.ball.x, state.ball.y = hole.x + hole.radius * 0.71, hole.y
    assert not check_hole_capture(state)

    state.ball.x = hole.x + hole.radius * 0.69
    assert check_hole_capture(state)


def test_capture_snaps_onto_hole_and_stops(state):
    hole = state.hole
    state.ball.x, state.ball.y = hole.x - 5, hole.y
    state.ball.vel_x = 5.0

    step(state)

    assert state.sinking
    assert state.sink_timer == 0
    assert (state.ball.x, state.ball.y) == (hole.x, hole.y)
    assert (state.ball.vel_x, state.ball.vel_y) == (0, 0)


def test_fast_ball_lips_out(state):
    hole = state.hole
    state.ball.x, state.ball.y = hole.x, hole.y + 6
    state.ball.vel_y = -12.5

    step(state)

    assert not state.sinking
    assert state.ball.vel_y == pytest.approx(-12.5 * FRICTION)


def test_resting_on_the_hole_sinks_and_wins(state):
    state.strokes = 1
    state.ball.x, state.ball.y = state.hole.x, state.hole.y
    radius = state.ball.radius

    assert step(state) is None
    assert state.sinking
    assert not state.over

    for _ in range(SINK_FRAMES):
        assert step(state) is None
    assert not state.over
    assert not state.scoreboard.message_visible

    text = step(state)

    assert state.over
    assert text.endswith("Hole in one!!")
    assert state.ball.radius == pytest.approx(radius * SINK_SHRINK ** (SINK_FRAMES + 1))
    board = state.scoreboard
    assert board.message == text
    assert board.message_visible
    assert board.reset_visible


def test_no_physics_while_sinking(state):
    state.sinking = True
    state.ball.vel_x = 3.0
    x = state.ball.x

    step(state)

    assert state.ball.x == x
    assert state.sink_timer == 1


def test_over_is_terminal(state):
    state.over = True
    state.ball.vel_x = 3.0
    before = (state.ball.x, state.ball.y, state.ball.radius)

    assert step(state) is None
    assert (state.ball.x, state.ball.y, state.ball.radius) == before


def test_score_text():
    assert score_text(1) == "Hole in one!!"
    assert score_text(2) == "2 strokes"
    assert score_text(7) == "7 strokes"


def test_win_message_is_seedable():
    first = win_message(3, np.random.default_rng(42))
    second = win_message(3, np.random.default_rng(42))

    assert first == second
    assert first.endswith(" 3 strokes")
    assert any(first.startswith(msg + " ") for msg in WIN_MESSAGES)


def test_win_message_uses_every_celebration():
    rng = np.random.default_rng(0)
    seen = {win_message(2, rng).rsplit(" 2 strokes", 1)[0] for _ in range(200)}
    assert seen == set(WIN_MESSAGES)


def test_putt_into_the_hole_end_to_end(state):
    rng = np.random.default_rng(7)
    x, y = state.ball.x, state.ball.y
    on_pointer_down(state, (x, y))
    on_pointer_move(state, (x, y + 50))
    assert on_pointer_up(state) == pytest.approx(6)

    text = None
    for _ in range(1000):
        text = step(state, rng) or text
        if state.over:
            break

    assert state.over
    assert state.strokes == 1
    assert text.endswith("Hole in one!!")
    assert math.isclose(state.ball.x, state.hole.x)
