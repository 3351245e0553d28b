"""
play_gui.py — Retro pygame window for SK01 (Stickochet).

Renders the 64x64 ARC frame of the running environment with a dark
arcade look and a sidebar showing level progress and controls.

Controls:
    WASD / Arrow Keys  = ACTION1-4 (Up / Down / Left / Right)
    Space              = ACTION5   (Next level, only on the goal)
    Backspace          = ACTION7   (Give up: new board, -1 checkpoint)
    R                  = RESET     (Reset the environment)
    ESC / Q            = Quit

Usage:
    uv run python play_gui.py
    uv run python play_gui.py --seed 42
    uv run python play_gui.py --scale 6 --no-scanlines
"""

import argparse
import logging
import math
import sys
import time

import numpy as np
import pygame

import arc_agi
from arcengine import GameAction

from stickochet.generator import GeneratorConfig
from stickochet.render import cell_edges

logger = logging.getLogger(__name__)

GAME_ID = "sk01-v1"

# ═══════════════════════════════════════════════════════════════════════════
#  RETRO COLOR MAP (ARC palette index → RGB)
# ═══════════════════════════════════════════════════════════════════════════
RETRO: dict[int, tuple[int, int, int]] = {
    0:  (235, 235, 220),    # floor → warm cream
    1:  (190, 195, 205),
    2:  (145, 148, 160),    # collected checkpoint → faded gray
    3:  (100, 105, 118),    # HUD empty pip
    4:  (65, 68, 82),       # wall → dark slate
    5:  (35, 38, 50),       # letterbox → deep navy
    6:  (255, 40, 170),
    7:  (255, 120, 210),
    8:  (240, 50, 40),
    9:  (30, 140, 255),     # player → electric blue
    10: (50, 210, 240),
    11: (255, 220, 20),     # checkpoint → bold yellow
    12: (255, 145, 25),
    13: (190, 20, 65),
    14: (30, 210, 60),      # goal → emerald
    15: (165, 85, 235),     # goop → violet
}

# ═══════════════════════════════════════════════════════════════════════════
#  UI COLORS / LAYOUT
# ═══════════════════════════════════════════════════════════════════════════
BG            = (28, 30, 42)
PANEL_BG      = (22, 24, 38)
BORDER_GREEN  = (40, 255, 90)
BORDER_DIM    = (20, 130, 50)
TEXT_GREEN    = (50, 255, 100)
TEXT_DIM      = (30, 150, 60)
ACCENT_YELLOW = (255, 240, 40)
CYAN          = (40, 230, 255)
KEY_BG        = (22, 42, 30)
KEY_BORDER    = (50, 180, 70)

FRAME_PX       = 64       # ARC frames are always 64x64
GRID_SCALE     = 9        # screen pixels per frame pixel
SIDEBAR_W      = 290
GRID_MARGIN    = 12
FPS            = 30
SCANLINE_ALPHA = 12

CONTROLS = [
    ("W/^", "UP"),     ("S/v", "DOWN"),
    ("A/<", "LEFT"),   ("D/>", "RIGHT"),
    ("SPC", "NEXT"),   ("BKSP", "GIVE UP"),
    (" R ", "RESET"),  ("ESC", "QUIT"),
]

KEY_ACTIONS = {
    pygame.K_w: GameAction.ACTION1,
    pygame.K_UP: GameAction.ACTION1,
    pygame.K_s: GameAction.ACTION2,
    pygame.K_DOWN: GameAction.ACTION2,
    pygame.K_a: GameAction.ACTION3,
    pygame.K_LEFT: GameAction.ACTION3,
    pygame.K_d: GameAction.ACTION4,
    pygame.K_RIGHT: GameAction.ACTION4,
    pygame.K_SPACE: GameAction.ACTION5,
    pygame.K_BACKSPACE: GameAction.ACTION7,
}


# ═══════════════════════════════════════════════════════════════════════════
#  DRAWING HELPERS
# ═══════════════════════════════════════════════════════════════════════════
def load_font(size: int, bold: bool = False) -> pygame.font.Font:
    for name in ("Courier New", "Courier", "Menlo", "Consolas", "monospace"):
        f = pygame.font.SysFont(name, size, bold=bold)
        if f:
            return f
    return pygame.font.Font(None, size)


def make_scanlines(w: int, h: int) -> pygame.Surface:
    s = pygame.Surface((w, h), pygame.SRCALPHA)
    for y in range(0, h, 3):
        pygame.draw.line(s, (0, 0, 0, SCANLINE_ALPHA), (0, y), (w, y))
    return s


def txt(surf, font, text, x, y, color=TEXT_GREEN, shadow=True):
    """Render text with newlines. Returns y after the last line."""
    lh = font.get_linesize()
    for line in text.split("\n"):
        if shadow:
            surf.blit(font.render(line, False, (0, 0, 0)), (x + 1, y + 1))
        surf.blit(font.render(line, False, color), (x, y))
        y += lh
    return y


def keycap(surf, font, label, x, y):
    """Draw a keycap badge, return the width consumed."""
    tw, th = font.size(label)
    r = pygame.Rect(x, y - 2, tw + 10, th + 4)
    pygame.draw.rect(surf, KEY_BG, r)
    pygame.draw.rect(surf, KEY_BORDER, r, 1)
    surf.blit(font.render(label, False, TEXT_GREEN), (x + 5, y))
    return r.width + 5


def glow_border(surf, rect, color, width=2, layers=4):
    for i in range(layers, 0, -1):
        a = max(8, 45 // i)
        exp = rect.inflate(i * 2, i * 2)
        gs = pygame.Surface((exp.w, exp.h), pygame.SRCALPHA)
        pygame.draw.rect(gs, (*color[:3], a), gs.get_rect(), width)
        surf.blit(gs, exp.topleft)
    pygame.draw.rect(surf, color[:3], rect, width)


# ═══════════════════════════════════════════════════════════════════════════
#  FRAME → SURFACE
# ═══════════════════════════════════════════════════════════════════════════
def render_frame(frame: np.ndarray, scale: int, cells: int) -> pygame.Surface:
    """Colour a 64x64 ARC frame and scale it up with crisp pixels.

    *cells* is the board width in game cells; it sets the spacing of the
    faint grid lines drawn over the board.
    """
    h, w = frame.shape
    rgb = np.zeros((h, w, 3), dtype=np.uint8)
    for val, col in RETRO.items():
        rgb[frame == val] = col

    small = pygame.surfarray.make_surface(rgb.transpose(1, 0, 2))
    big = pygame.transform.scale(small, (w * scale, h * scale))

    edges = [e * scale for e in cell_edges(cells, FRAME_PX)]
    if edges[1] - edges[0] >= 16:
        overlay = pygame.Surface((w * scale, h * scale), pygame.SRCALPHA)
        lo, hi = edges[0], edges[-1] - 1
        for g in edges[1:-1]:
            pygame.draw.line(overlay, (0, 0, 0, 30), (g, lo), (g, hi))
            pygame.draw.line(overlay, (0, 0, 0, 30), (lo, g), (hi, g))
        big.blit(overlay, (0, 0))
    return big


# ═══════════════════════════════════════════════════════════════════════════
#  SIDEBAR
# ═══════════════════════════════════════════════════════════════════════════
def draw_sidebar(surf, fonts, rect, state, levels_done, actions, t, seed):
    fs = fonts["sm"]
    fx = fonts["xs"]

    pygame.draw.rect(surf, PANEL_BG, rect)
    pygame.draw.line(surf, BORDER_DIM, (rect.left, 0), (rect.left, rect.bottom), 2)
    pygame.draw.line(surf, BORDER_GREEN, (rect.left + 3, 0), (rect.left + 3, rect.bottom), 1)

    x0 = rect.left + 16
    y = rect.top + 12
    mw = rect.width - 32

    y = txt(surf, fonts["lg"], "STICKOCHET", x0, y, ACCENT_YELLOW)
    y += 6

    if state == "WON":
        sc, sd = ACCENT_YELLOW, "** ALL BOARDS CLEARED **"
    else:
        sc = TEXT_GREEN
        sd = "> SLIDING" if math.sin(t * 4.5) > 0 else "  SLIDING"
    y = txt(surf, fs, sd, x0, y, sc)
    y += 4

    y = txt(surf, fs, f"BOARD {levels_done + 1}", x0, y, CYAN)
    y = txt(surf, fx, f"ACTIONS: {actions:05d}", x0, y, TEXT_DIM, shadow=False)
    y += 8

    pygame.draw.line(surf, BORDER_DIM, (x0, y), (x0 + mw, y))
    y += 8
    y = txt(surf, fs, "-- CONTROLS --", x0, y, ACCENT_YELLOW)
    y += 5

    col2 = x0 + mw // 2
    rh = fx.get_linesize() + 5
    for i in range(0, len(CONTROLS), 2):
        for (key, desc), cx in zip(CONTROLS[i:i + 2], (x0, col2)):
            kw = keycap(surf, fx, key, cx, y)
            txt(surf, fx, desc, cx + kw, y, TEXT_DIM, shadow=False)
        y += rh
    y += 6

    pygame.draw.line(surf, BORDER_DIM, (x0, y), (x0 + mw, y))
    y += 8
    txt(
        surf, fx,
        "SLIDE UNTIL A WALL STOPS YOU.\n"
        "GOOP STOPS YOU ON CONTACT.\n"
        "REST ON YELLOW TO COLLECT,\n"
        "LAND ON GREEN, PRESS SPACE.",
        x0, y, TEXT_DIM,
    )

    txt(surf, fx, f"SEED:{seed:04d}  FPS:{FPS}  ESC=QUIT", x0, rect.bottom - 20, BORDER_DIM, shadow=False)


# ═══════════════════════════════════════════════════════════════════════════
#  MAIN
# ═══════════════════════════════════════════════════════════════════════════
def main():
    parser = argparse.ArgumentParser(description="SK01 Stickochet Retro Player")
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--scale", type=int, default=GRID_SCALE,
                        help=f"Pixels per frame-pixel (default {GRID_SCALE})")
    parser.add_argument("--no-scanlines", action="store_true")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    arc = arc_agi.Arcade(environments_dir="./environment_files")
    env = arc.make(GAME_ID, seed=args.seed)
    if env is None:
        logger.error("Could not create environment %s", GAME_ID)
        sys.exit(1)
    frame_data = env.reset()
    if frame_data is None:
        logger.error("env.reset() returned None")
        sys.exit(1)

    pygame.init()
    # One physical press, one action.
    pygame.key.set_repeat()

    scale = args.scale
    grid_px = FRAME_PX * scale
    margin = GRID_MARGIN
    win_w = grid_px + margin * 2 + SIDEBAR_W
    win_h = grid_px + margin * 2

    screen = pygame.display.set_mode((win_w, win_h))
    pygame.display.set_caption("SK01 - STICKOCHET - ARC-AGI-3")
    clock = pygame.time.Clock()

    fonts = {
        "lg": load_font(22, bold=True),
        "sm": load_font(15),
        "xs": load_font(12),
    }
    scanlines_surf = make_scanlines(win_w, win_h)
    cells = GeneratorConfig().width

    total_actions = 0
    state_str = "NOT_FINISHED"
    levels_completed = 0
    t0 = time.time()

    def sync(fd):
        nonlocal state_str, levels_completed
        if fd is None:
            return
        state_str = fd.state.value if hasattr(fd.state, "value") else str(fd.state)
        levels_completed = fd.levels_completed

    sync(frame_data)

    running = True
    while running:
        t = time.time() - t0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
                break
            if event.type != pygame.KEYDOWN:
                continue
            if event.key in (pygame.K_ESCAPE, pygame.K_q):
                running = False
                break
            if event.key == pygame.K_r:
                frame_data = env.reset()
                total_actions = 0
                sync(frame_data)
                continue
            action = KEY_ACTIONS.get(event.key)
            if action is not None:
                frame_data = env.step(action)
                total_actions += 1
                sync(frame_data)

        screen.fill(BG)

        if frame_data is not None and frame_data.frame is not None and len(frame_data.frame) > 0:
            grid_surf = render_frame(frame_data.frame[0], scale, cells)
        else:
            grid_surf = pygame.Surface((grid_px, grid_px))
            grid_surf.fill(BG)
        screen.blit(grid_surf, (margin, margin))

        pulse = 0.7 + 0.3 * math.sin(t * 2.0)
        bc = tuple(int(c * pulse) for c in BORDER_GREEN)
        glow_border(screen, pygame.Rect(margin - 4, margin - 4, grid_px + 8, grid_px + 8), bc)

        sb_rect = pygame.Rect(grid_px + margin * 2, 0, SIDEBAR_W, win_h)
        draw_sidebar(screen, fonts, sb_rect, state_str, levels_completed, total_actions, t, args.seed)

        if not args.no_scanlines:
            screen.blit(scanlines_surf, (0, 0))

        pygame.display.flip()
        clock.tick(FPS)

    pygame.quit()
    print()
    print("+----------------------------------+")
    print("|        FINAL SCORECARD           |")
    print("+----------------------------------+")
    print(arc.get_scorecard())


if __name__ == "__main__":
    main()
