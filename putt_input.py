"""
Pointer handling: turns a press / drag / release on the ball into a putt.

Positions are (x, y) tuples in field pixels.
"""
import logging
import math

from putt_state import (
    DRAG_SCALE,
    GRAB_RADIUS_FACTOR,
    MAX_POWER,
    PUTT_DEADZONE,
    DragSession,
)

logger = logging.getLogger("putting.input")


def drag_power(drag):
    dx, dy = drag.vector
    return min(math.hypot(dx, dy) * DRAG_SCALE, MAX_POWER)


def aim_preview(state):
    """(power, angle) the current drag would putt with, or None when not aiming."""
    if state.drag is None:
        return None
    dx, dy = state.drag.vector
    return drag_power(state.drag), math.atan2(dy, dx)


def on_pointer_down(state, pos):
    if state.over or state.sinking or state.ball_is_moving():
        return False

    ball = state.ball
    if math.hypot(pos[0] - ball.x, pos[1] - ball.y) < ball.radius * GRAB_RADIUS_FACTOR:
        state.drag = DragSession(pos)
        logger.debug("Drag started at (%.1f, %.1f)", pos[0], pos[1])
        return True
    return False


def on_pointer_move(state, pos):
    """Returns True when the move belongs to a drag (host should not scroll)."""
    if state.drag is None:
        return False
    state.drag.current = tuple(pos)
    return True


def on_pointer_up(state):
    """
    Release the drag. Returns the putt power, or None if nothing was putted.
    """
    if state.drag is None:
        return None

    drag = state.drag
    state.drag = None

    power = drag_power(drag)
    if power <= PUTT_DEADZONE:
        logger.debug("Drag discarded, power %.2f inside deadzone", power)
        return None

    dx, dy = drag.vector
    angle = math.atan2(dy, dx)
    state.ball.vel_x = math.cos(angle) * power
    state.ball.vel_y = math.sin(angle) * power
    state.strokes += 1

    state.scoreboard.set_strokes(state.strokes)
    state.scoreboard.hide_hint()
    logger.info("Putt %d: power %.2f, angle %.1f deg", state.strokes, power, math.degrees(angle))
    return power


def on_pointer_leave(state):
    """Pointer left the field or the touch was cancelled."""
    if state.drag is not None:
        logger.debug("Drag cancelled")
    state.drag = None
