from __future__ import annotations

from typing import Dict, Tuple

import numpy as np
import pygame

from tetris_ai.game.pieces import TetrominoType
from tetris_ai.session import SessionSnapshot, UiState

Color = Tuple[int, int, int]

EMPTY: Color = (20, 20, 26)
BACKGROUND: Color = (10, 10, 14)
GRID_LINE: Color = (30, 30, 36)
TEXT: Color = (230, 230, 230)

PALETTE: Dict[TetrominoType, Color] = {
    TetrominoType.I: (0, 240, 240),
    TetrominoType.O: (240, 240, 0),
    TetrominoType.T: (160, 0, 240),
    TetrominoType.S: (0, 240, 0),
    TetrominoType.Z: (240, 0, 0),
    TetrominoType.J: (0, 0, 240),
    TetrominoType.L: (240, 160, 0),
}


def _color_for_value(v: int) -> Color:
    """Cell color; negative values (the falling piece) are drawn lighter."""
    if v == 0:
        return EMPTY
    base = PALETTE[TetrominoType(abs(v))]
    if v > 0:
        return base
    return tuple(min(255, c + (255 - c) // 3) for c in base)


BANNERS = {
    UiState.PAUSE: "PAUSED - P to resume",
    UiState.GAME_OVER: "GAME OVER - R to restart",
}


class Renderer:
    """Draws session snapshots: the playfield on the left, a text panel on the right."""

    def __init__(self, cell_size: int = 28, margin: int = 20, panel_width: int = 160) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width
        self._font = None

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        return (
            width * self.cell_size + self.margin * 3 + self.panel_width,
            height * self.cell_size + self.margin * 2,
        )

    def _grid_surface(self, cells: np.ndarray) -> pygame.Surface:
        rows, cols = cells.shape
        size = self.cell_size
        surf = pygame.Surface((cols * size, rows * size))
        surf.fill(GRID_LINE)
        for (row, col), value in np.ndenumerate(cells):
            cell = pygame.Rect(col * size, row * size, size, size).inflate(-1, -1)
            pygame.draw.rect(surf, _color_for_value(int(value)), cell)
        return surf

    def _text(self, screen: pygame.Surface, text: str, pos: Tuple[int, int]) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 24)
        screen.blit(self._font.render(text, True, TEXT), pos)

    def draw(self, screen: pygame.Surface, snapshot: SessionSnapshot) -> None:
        board = snapshot.board
        screen.fill(BACKGROUND)
        screen.blit(self._grid_surface(board.overlay()), (self.margin, self.margin))

        panel_x = self.margin * 2 + board.width * self.cell_size
        lines = [
            f"score {snapshot.score}",
            f"lines {snapshot.lines_total}",
            f"level {snapshot.level}",
            f"player {snapshot.player_type.value}",
        ]
        if board.next_kind is not None:
            lines.append(f"next {board.next_kind.name}")
        if snapshot.advisor_available is False:
            lines.append("advisor offline")
        if snapshot.ui_state is UiState.GAME_OVER:
            lines.append(f"final {snapshot.final_score}")
        for i, text in enumerate(lines):
            self._text(screen, text, (panel_x, self.margin + i * 26))

        banner = BANNERS.get(snapshot.ui_state)
        if banner:
            self._text(screen, banner, (self.margin, 2))
        pygame.display.flip()
