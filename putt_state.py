import logging
import math

logger = logging.getLogger("putting.state")

# Sizes, as fractions of the field width / height
BALL_RADIUS_RATIO = 0.022
HOLE_RADIUS_RATIO = 0.035
MIN_BALL_RADIUS = 6
MIN_HOLE_RADIUS = 10
BALL_START_FRACTION = 0.78
HOLE_FRACTION = 0.18

# Ball physics (per frame)
FRICTION = 0.985
MIN_SPEED = 0.15
RESTITUTION = 0.7

# Putting
MAX_POWER = 18
DRAG_SCALE = 0.12
PUTT_DEADZONE = 0.5
GRAB_RADIUS_FACTOR = 4

# Hole capture
CAPTURE_RADIUS_FACTOR = 0.7
CAPTURE_SPEED_FACTOR = 0.65
SINK_SHRINK = 0.92
SINK_FRAMES = 20


def ball_radius_for(width):
    return max(MIN_BALL_RADIUS, BALL_RADIUS_RATIO * width)


def hole_radius_for(width):
    return max(MIN_HOLE_RADIUS, HOLE_RADIUS_RATIO * width)


class Ball:
    def __init__(self, x, y, radius):
        self.x = x
        self.y = y
        self.vel_x = 0.0
        self.vel_y = 0.0
        self.radius = radius

    @property
    def speed(self):
        return math.hypot(self.vel_x, self.vel_y)

    def stop(self):
        self.vel_x = 0.0
        self.vel_y = 0.0


class Hole:
    def __init__(self, x, y, radius):
        self.x = x
        self.y = y
        self.radius = radius


class DragSession:
    """Aim gesture between pointer-down and pointer-up."""

    def __init__(self, start):
        self.start = tuple(start)
        self.current = tuple(start)

    @property
    def vector(self):
        # Reversed: pulling back shoots forward
        return (self.start[0] - self.current[0], self.start[1] - self.current[1])


class Scoreboard:
    """
    What the display layer shows next to the field: the stroke count, the
    win message, the reset control and the one-time aiming hint.
    """

    def __init__(self):
        self.clear()

    def clear(self):
        self.strokes = 0
        self.message = ""
        self.message_visible = False
        self.reset_visible = False
        self.hint_visible = True

    def set_strokes(self, strokes):
        self.strokes = strokes

    def hide_hint(self):
        self.hint_visible = False

    def show_win(self, text):
        self.message = text
        self.message_visible = True
        self.reset_visible = True


class GameState:
    """
    Everything one putting session owns: ball, hole, the open drag (if any),
    the stroke count and the sinking / over flags.
    """

    def __init__(self, width, height, scoreboard=None):
        self.width = width
        self.height = height
        self.scoreboard = scoreboard if scoreboard is not None else Scoreboard()
        self.reset()

    @property
    def dragging(self):
        return self.drag is not None

    def _place_objects(self):
        self.ball = Ball(self.width / 2, self.height * BALL_START_FRACTION,
                         ball_radius_for(self.width))
        self.hole = Hole(self.width / 2, self.height * HOLE_FRACTION,
                         hole_radius_for(self.width))

    def reset(self):
        """Start a fresh session. Safe to call at any point, even mid-drag or mid-sink."""
        self._place_objects()
        self.strokes = 0
        self.drag = None
        self.sinking = False
        self.over = False
        self.sink_timer = 0
        self.scoreboard.clear()
        logger.info("Game reset (%dx%d field)", self.width, self.height)

    def resize(self, width, height):
        """
        Rescale the field to a new surface size, keeping the session going.

        Positions keep their fraction of the field, velocities and drag points
        scale with the width. Strokes and the game-over state are untouched.
        """
        if width <= 0 or height <= 0:
            logger.debug("Ignoring degenerate resize to %sx%s", width, height)
            return
        if (width, height) == (self.width, self.height):
            return

        sx = width / self.width
        sy = height / self.height

        ball = self.ball
        ball.x *= sx
        ball.y *= sy
        ball.vel_x *= sx
        ball.vel_y *= sx
        if self.sinking or self.over:
            # Keep the capture animation where it was
            ball.radius *= sx
        else:
            ball.radius = ball_radius_for(width)

        self.hole.x *= sx
        self.hole.y *= sy
        self.hole.radius = hole_radius_for(width)

        if self.drag is not None:
            self.drag.start = (self.drag.start[0] * sx, self.drag.start[1] * sy)
            self.drag.current = (self.drag.current[0] * sx, self.drag.current[1] * sy)

        logger.debug("Resized field %dx%d -> %dx%d", self.width, self.height, width, height)
        self.width = width
        self.height = height

    def ball_is_moving(self):
        return abs(self.ball.vel_x) > MIN_SPEED or abs(self.ball.vel_y) > MIN_SPEED

    def distance_to_hole(self):
        return math.hypot(self.ball.x - self.hole.x, self.ball.y - self.hole.y)
