# src/maze_explorer/app/viewer.py
#!/usr/bin/env python3
"""
Maze Explorer Viewer: maze grid + metrics + controls

- Keyboard:
    [SPACE]      -> run/pause
    [N]          -> single step
    [R]          -> reset
    [G]          -> new maze
    [C]          -> cycle solutions
    [1]..[4]     -> BFS / DFS / A* / Dijkstra
    [+]/[-]      -> speed
    [[]/[]]      -> maze size
    [Q]/[ESC]    -> quit

Settings come from ENV / CLI, see maze_explorer.app.config.
"""

import logging
import sys
from typing import Dict, List, Optional, Tuple

import pygame

from maze_explorer.app.config import resolve_settings
from maze_explorer.app.session import ExplorerSession
from maze_explorer.core.algorithms import ALGORITHMS, algorithm_label
from maze_explorer.core.types import CellType

logger = logging.getLogger(__name__)

# ---------- Config ----------
PANEL_W = 420            # right band: metrics + buttons
GRID_MARGIN = 16
FONT_NAME = None  # default pygame font
ALGO_KEYS = {
    pygame.K_1: "bfs",
    pygame.K_2: "dfs",
    pygame.K_3: "astar",
    pygame.K_4: "dijkstra",
}

# Colors
BLACK       = (  0,  0,  0)
CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)

KIND_COLORS: Dict[CellType, Tuple[int, int, int]] = {
    CellType.WALL:           ( 30, 34, 42),
    CellType.PATH:           (200,200,200),
    CellType.START:          ( 70,130,180),
    CellType.END:            (220, 50, 47),
    CellType.VISITED:        (255,140,190),
    CellType.VISITING:       (110,190,255),
    CellType.SOLUTION:       (  0,255,200),
    CellType.ALTERNATE_PATH: (255,210,120),
}


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False  # highlight state

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        bg_idle   = (36, 40, 48, 220)
        bg_hover  = (46, 50, 60, 230)
        bg_active = (58, 86, 160, 235)
        border_active = (120, 170, 255, 255)

        if self.active and self.togglable:
            bg = bg_active
        elif self.hover:
            bg = bg_hover
        else:
            bg = bg_idle
        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, border_active, self.rect, width=2, border_radius=10)

        text = font.render(self.label, True, (235,238,242))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event):
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()


# ---------- Viewer ----------
class Viewer:
    def __init__(self, session: ExplorerSession):
        pygame.init()

        self.session = session
        self.font_small = pygame.font.Font(FONT_NAME, 16)
        self.font = pygame.font.Font(FONT_NAME, 20)
        self.font_big = pygame.font.Font(FONT_NAME, 24)

        win_w, win_h = 1100, 720
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Maze Explorer")

        self._buttons: List[UIButton] = []
        self._algo_buttons: Dict[str, UIButton] = {}
        self.btn_run: Optional[UIButton] = None
        self._layout(win_w, win_h)

        self._aspect = max(1e-6, win_w / win_h)
        self._min_w  = 760
        self._min_h  = int(self._min_w / self._aspect)
        self.clock = pygame.time.Clock()

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits window and center the grid."""
        maze = self.session.maze
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = int(max(6, min(avail_w // maze.width, avail_h // maze.height)))

        grid_plate_w = maze.width * self.cell_size + 2 * GRID_MARGIN
        grid_plate_h = maze.height * self.cell_size + 2 * GRID_MARGIN

        left_x = max(0, (win_w - (grid_plate_w + PANEL_W)) // 2)
        top_y  = max(0, (win_h - grid_plate_h) // 2)
        self.canvas_rect = pygame.Rect(left_x, top_y, grid_plate_w, grid_plate_h)
        self._grid_origin = (self.canvas_rect.x + GRID_MARGIN, self.canvas_rect.y + GRID_MARGIN)

        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(PANEL_W, win_w - self.canvas_rect.right),
                                       win_h)
        self._build_buttons()

    def _apply_aspect_resize(self, req_w: int, req_h: int):
        req_w = max(self._min_w, req_w)
        req_h = max(self._min_h, req_h)
        cand_h_from_w = int(round(req_w / self._aspect))
        cand_w_from_h = int(round(req_h * self._aspect))
        if abs(req_h - cand_h_from_w) <= abs(req_w - cand_w_from_h):
            new_w, new_h = req_w, cand_h_from_w
        else:
            new_w, new_h = cand_w_from_h, req_h
        self.screen = pygame.display.set_mode((new_w, new_h), pygame.RESIZABLE)
        self._layout(new_w, new_h)

    # ---------- loop ----------
    def run(self):
        while True:
            self._handle_events()
            size_before = (self.session.maze.width, self.session.maze.height)
            self.session.tick(pygame.time.get_ticks())
            if (self.session.maze.width, self.session.maze.height) != size_before:
                self._layout(*self.screen.get_size())
            self._refresh_active_states()
            self._draw()
            self.clock.tick(60)

    def _quit(self):
        pygame.quit()
        sys.exit(0)

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                self._quit()
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    self._quit()
                elif e.key == pygame.K_SPACE:
                    self.session.toggle_run()
                elif e.key == pygame.K_n:
                    self.session.step()
                elif e.key == pygame.K_r:
                    self.session.reset()
                elif e.key == pygame.K_g:
                    self._new_maze()
                elif e.key == pygame.K_c:
                    self.session.cycle_solution()
                elif e.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self.session.bump_speed(+5)
                elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
                    self.session.bump_speed(-5)
                elif e.key == pygame.K_LEFTBRACKET:
                    self._bump_size(-1)
                elif e.key == pygame.K_RIGHTBRACKET:
                    self._bump_size(+1)
                elif e.key in ALGO_KEYS:
                    self.session.select_algorithm(ALGO_KEYS[e.key])
            elif e.type == pygame.VIDEORESIZE:
                self._apply_aspect_resize(e.w, e.h)
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                for b in list(self._buttons):
                    b.handle_mouse(e)

    def _new_maze(self):
        try:
            self.session.new_maze()
        except ValueError as ex:
            logger.error("failed to generate maze: %s", ex)
            return
        self._layout(*self.screen.get_size())

    def _bump_size(self, dv: int):
        self.session.bump_size(dv)
        self._layout(*self.screen.get_size())

    # ---------- drawing ----------
    def _draw(self):
        self._draw_backdrop()
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_backdrop(self):
        w, h = self.screen.get_size()
        top = (24, 26, 32); bot = (36, 40, 48)
        for y in range(h):
            t = y / max(1, h-1)
            c = (
                int(top[0] + (bot[0]-top[0]) * t),
                int(top[1] + (bot[1]-top[1]) * t),
                int(top[2] + (bot[2]-top[2]) * t),
            )
            pygame.draw.line(self.screen, c, (0, y), (w, y))

    def _draw_grid(self):
        cs = self.cell_size
        ox, oy = self._grid_origin
        grid = self.session.maze.grid
        for row in range(grid.height):
            for col in range(grid.width):
                cell = grid.cells[row][col]
                rect = pygame.Rect(ox + col*cs, oy + row*cs, cs, cs)
                # start/end keep their colour while the search paints over them
                kind = cell.structural_kind() if (cell.is_start or cell.is_end) else cell.kind
                pygame.draw.rect(self.screen, KIND_COLORS[kind], rect)
                pygame.draw.rect(self.screen, BLACK, rect, 1)

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        self._algo_buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 230  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 34
        gap = 8
        half = (w - 8) // 2

        def add(label, cb, rect, *, togglable=False) -> UIButton:
            btn = UIButton(label, rect, cb, togglable=togglable)
            self._buttons.append(btn)
            return btn

        s = self.session
        self.btn_run = add("Run / Pause", s.toggle_run, pygame.Rect(x, y, w, h), togglable=True); y += h + gap
        add("Step Once", s.step, pygame.Rect(x, y, half, h))
        add("Reset", s.reset, pygame.Rect(x + half + 8, y, half, h)); y += h + gap
        add("New Maze", self._new_maze, pygame.Rect(x, y, half, h))
        add("Cycle Solutions", s.cycle_solution, pygame.Rect(x + half + 8, y, half, h)); y += h + gap
        add("Speed -", lambda: s.bump_speed(-5), pygame.Rect(x, y, half, h))
        add("Speed +", lambda: s.bump_speed(+5), pygame.Rect(x + half + 8, y, half, h)); y += h + gap
        add("Size -", lambda: self._bump_size(-1), pygame.Rect(x, y, half, h))
        add("Size +", lambda: self._bump_size(+1), pygame.Rect(x + half + 8, y, half, h)); y += h + gap

        for name in ALGORITHMS:
            self._algo_buttons[name] = add(f"Algo: {algorithm_label(name)}",
                                           lambda n=name: s.select_algorithm(n),
                                           pygame.Rect(x, y, w, h), togglable=True)
            y += h + gap

        self._refresh_active_states()

    def _refresh_active_states(self):
        if self.btn_run is not None:
            self.btn_run.set_active(self.session.running)
        for name, btn in self._algo_buttons.items():
            btn.set_active(self.session.algorithm == name)

    def _draw_metrics_and_buttons(self):
        rb = self._right_band
        s = self.session

        card_h = 210
        card = pygame.Surface((rb.width - 20, card_h), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0,0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        m = s.stats
        line("Metrics", big=True, color=ACCENT_GOLD)
        line(f"Visited: {m.get('visited', 0)}")
        line(f"Path Len: {m.get('path_len', 0)}")
        line(f"Time: {m.get('elapsed_ms', 0.0):.0f} ms")
        line(f"State: {s.state}")
        if s.solutions:
            line(f"Solution {s.current_solution + 1} of {len(s.solutions)}")
        line(f"{s.size}x{s.size}  |  {algorithm_label(s.algorithm)}  |  speed {s.speed}")

        for b in self._buttons:
            b.draw(self.screen, self.font_small)


# ---------- main ----------
def main():
    try:
        settings = resolve_settings()
    except ValueError as ex:
        print(f"Invalid settings: {ex}", file=sys.stderr)
        sys.exit(2)

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("starting viewer: %s", settings)
    Viewer(ExplorerSession(settings)).run()

if __name__ == "__main__":
    main()
