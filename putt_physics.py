import logging

import numpy as np

from putt_state import (
    CAPTURE_RADIUS_FACTOR,
    CAPTURE_SPEED_FACTOR,
    FRICTION,
    MAX_POWER,
    MIN_SPEED,
    RESTITUTION,
    SINK_FRAMES,
    SINK_SHRINK,
)

logger = logging.getLogger("putting.physics")

WIN_MESSAGES = [
    "Nice putt!",
    "In the hole!",
    "Nailed it!",
    "What a shot!",
]


def score_text(strokes):
    if strokes == 1:
        return "Hole in one!!"
    return f"{strokes} strokes"


def win_message(strokes, rng=None):
    """Celebration picked uniformly at random, followed by the score."""
    if rng is None:
        rng = np.random.default_rng()
    celebration = WIN_MESSAGES[int(rng.integers(len(WIN_MESSAGES)))]
    return f"{celebration} {score_text(strokes)}"


def bounce_off_walls(ball, width, height):
    # Each axis on its own, so a corner hit bounces off both walls
    if ball.x - ball.radius < 0:
        ball.x = ball.radius
        ball.vel_x = abs(ball.vel_x) * RESTITUTION
    if ball.x + ball.radius > width:
        ball.x = width - ball.radius
        ball.vel_x = -abs(ball.vel_x) * RESTITUTION

    if ball.y - ball.radius < 0:
        ball.y = ball.radius
        ball.vel_y = abs(ball.vel_y) * RESTITUTION
    if ball.y + ball.radius > height:
        ball.y = height - ball.radius
        ball.vel_y = -abs(ball.vel_y) * RESTITUTION


def check_hole_capture(state):
    """Start sinking if the ball is over the hole and slow enough to drop."""
    ball, hole = state.ball, state.hole
    if state.distance_to_hole() < hole.radius * CAPTURE_RADIUS_FACTOR \
            and ball.speed < MAX_POWER * CAPTURE_SPEED_FACTOR:
        state.sinking = True
        state.sink_timer = 0
        ball.stop()
        ball.x = hole.x
        ball.y = hole.y
        logger.info("Ball captured after %d stroke(s)", state.strokes)
        return True
    return False


def _sink(state, rng):
    state.sink_timer += 1
    state.ball.radius *= SINK_SHRINK
    if state.sink_timer > SINK_FRAMES:
        state.over = True
        text = win_message(state.strokes, rng)
        state.scoreboard.show_win(text)
        logger.info("Hole finished: %s", text)
        return text
    return None


def step(state, rng=None):
    """
    Advance the simulation by one frame.

    Returns the win message on the frame the hole is finished, None otherwise.
    """
    if state.over:
        return None

    if state.sinking:
        return _sink(state, rng)

    ball = state.ball

    # Apply velocity
    ball.x += ball.vel_x
    ball.y += ball.vel_y

    # Apply friction
    ball.vel_x *= FRICTION
    ball.vel_y *= FRICTION

    # Stop the ball on an axis once it's crawling
    if abs(ball.vel_x) < MIN_SPEED * 0.5:
        ball.vel_x = 0.0
    if abs(ball.vel_y) < MIN_SPEED * 0.5:
        ball.vel_y = 0.0

    bounce_off_walls(ball, state.width, state.height)
    check_hole_capture(state)
    return None
