"""
Drawing of a GameState onto a pygame Surface.

Nothing here mutates the game state; the same state can be drawn any
number of times.
"""
import math

import pygame

from putt_input import aim_preview
from putt_state import MAX_POWER

# Colours
GREEN = (45, 138, 78)
FRINGE = (30, 107, 58)
STRIPE = (255, 255, 255, 8)
HOLE_BLACK = (26, 26, 26)
HOLE_INNER = (17, 17, 17)
HOLE_SHADOW = (0, 0, 0, 77)
POLE_GREY = (204, 204, 204)
FLAG_RED = (239, 68, 68)
BALL_BLUE = (59, 130, 246)
BALL_SHADOW = (0, 0, 0, 64)
HIGHLIGHT = (255, 255, 255, 153)
AIM_WHITE = (255, 255, 255, 178)
POWER_RED = (239, 68, 68, 128)
POWER_YELLOW = (250, 204, 21, 128)
WHITE = (255, 255, 255)
PANEL = (0, 0, 0, 160)
BUTTON_BG = (60, 60, 60)

HINT_TEXT = "Drag back from the ball, release to putt"
RESET_TEXT = "Play again"

_fonts = {}


def _font(size):
    if not pygame.font.get_init():
        # Fonts from before a pygame.quit() are dead
        _fonts.clear()
        pygame.font.init()
    if size not in _fonts:
        _fonts[size] = pygame.font.Font(None, size)
    return _fonts[size]


def _overlay(surface):
    return pygame.Surface(surface.get_size(), pygame.SRCALPHA)


def draw_green(surface, state):
    w, h = state.width, state.height
    surface.fill(GREEN)

    # Subtle grass stripes
    stripes = _overlay(surface)
    stripe_w = max(1, int(w * 0.08))
    for x in range(0, w, stripe_w * 2):
        pygame.draw.rect(stripes, STRIPE, (x, 0, stripe_w, h))
    surface.blit(stripes, (0, 0))

    # Fringe border
    border = int(max(4, w * 0.02))
    pygame.draw.rect(surface, FRINGE, (0, 0, w, h), border)


def draw_hole(surface, state):
    hole = state.hole
    center = (round(hole.x), round(hole.y))
    radius = max(1, round(hole.radius))

    shadow = _overlay(surface)
    pygame.draw.circle(shadow, HOLE_SHADOW, (center[0] + 2, center[1] + 2), radius)
    surface.blit(shadow, (0, 0))
    pygame.draw.circle(surface, HOLE_BLACK, center, radius)
    pygame.draw.circle(surface, HOLE_INNER, center, max(1, round(hole.radius * 0.8)))

    if state.sinking or state.over:
        return

    pole_x = hole.x + hole.radius * 0.3
    pole_top = hole.y - state.height * 0.09
    pygame.draw.line(surface, POLE_GREY, (pole_x, hole.y), (pole_x, pole_top), 2)
    pygame.draw.polygon(surface, FLAG_RED, [
        (pole_x, pole_top),
        (pole_x - hole.radius * 1.5, pole_top + hole.radius * 0.8),
        (pole_x, pole_top + hole.radius * 1.4),
    ])


def draw_ball(surface, state):
    if state.over:
        return
    ball = state.ball
    radius = max(1, round(ball.radius))

    overlay = _overlay(surface)
    pygame.draw.circle(overlay, BALL_SHADOW, (round(ball.x) + 2, round(ball.y) + 3), radius)
    surface.blit(overlay, (0, 0))

    pygame.draw.circle(surface, BALL_BLUE, (round(ball.x), round(ball.y)), radius)

    highlight = _overlay(surface)
    pygame.draw.circle(highlight, HIGHLIGHT,
                       (round(ball.x - ball.radius * 0.25), round(ball.y - ball.radius * 0.25)),
                       max(1, round(ball.radius * 0.35)))
    surface.blit(highlight, (0, 0))


def _dashed_line(surface, color, start, end, dash=6, width=2):
    length = math.hypot(end[0] - start[0], end[1] - start[1])
    if length == 0:
        return
    ux = (end[0] - start[0]) / length
    uy = (end[1] - start[1]) / length
    pos = 0.0
    while pos < length:
        seg_end = min(pos + dash, length)
        pygame.draw.line(surface, color,
                         (start[0] + ux * pos, start[1] + uy * pos),
                         (start[0] + ux * seg_end, start[1] + uy * seg_end), width)
        pos += dash * 2


def draw_aim_line(surface, state):
    preview = aim_preview(state)
    if preview is None:
        return
    power, angle = preview
    ball = state.ball

    overlay = _overlay(surface)
    line_len = power * 5
    end = (ball.x + math.cos(angle) * line_len, ball.y + math.sin(angle) * line_len)
    _dashed_line(overlay, AIM_WHITE, (ball.x, ball.y), end)

    # Power ring around the ball
    power_radius = round(power / MAX_POWER * ball.radius * 5)
    if power_radius > 2:
        color = POWER_RED if power > MAX_POWER * 0.7 else POWER_YELLOW
        pygame.draw.circle(overlay, color, (round(ball.x), round(ball.y)), power_radius, 2)
    surface.blit(overlay, (0, 0))


def reset_button_rect(state):
    w, h = 140, 36
    return pygame.Rect(state.width // 2 - w // 2, int(state.height * 0.45) + 30, w, h)


def draw_hud(surface, state):
    board = state.scoreboard
    font = _font(28)

    strokes = font.render(f"Strokes: {board.strokes}", True, WHITE)
    surface.blit(strokes, (12, 12))

    if board.hint_visible:
        hint = _font(22).render(HINT_TEXT, True, WHITE)
        surface.blit(hint, hint.get_rect(center=(state.width // 2, int(state.height * 0.92))))

    if board.message_visible:
        text = font.render(board.message, True, WHITE)
        rect = text.get_rect(center=(state.width // 2, int(state.height * 0.45)))
        panel = _overlay(surface)
        pygame.draw.rect(panel, PANEL, rect.inflate(24, 16), border_radius=8)
        surface.blit(panel, (0, 0))
        surface.blit(text, rect)

    if board.reset_visible:
        button = reset_button_rect(state)
        pygame.draw.rect(surface, BUTTON_BG, button, border_radius=6)
        label = font.render(RESET_TEXT, True, WHITE)
        surface.blit(label, label.get_rect(center=button.center))


def render(surface, state):
    draw_green(surface, state)
    draw_hole(surface, state)
    draw_ball(surface, state)
    draw_aim_line(surface, state)
    draw_hud(surface, state)
