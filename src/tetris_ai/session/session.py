from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Type

from tetris_ai.ai.planner import MovePlanner
from tetris_ai.ai.search import TetrisAI
from tetris_ai.external.client import AdvisorClient
from tetris_ai.external.planner import AdvisorPlanner
from tetris_ai.game.board import GameBoard
from tetris_ai.game.grid import BoardSnapshot
from tetris_ai.game.intents import Intent
from tetris_ai.game.rules import ScoringRules
from tetris_ai.score.ledger import ScoreLedger

from .settings import GameSettings, PlayerType
from .states import (
    AI_SPEED_FAST,
    AI_SPEED_NORMAL,
    EXTERNAL_SPEED_FAST,
    EXTERNAL_SPEED_NORMAL,
    UI_STATES,
    ActiveState,
    AIPlaying,
    ExternalPlaying,
    GameOver,
    Paused,
    Playing,
    SessionState,
    UiState,
    planner_of,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view handed to renderers."""

    board: BoardSnapshot
    ui_state: UiState
    score: int
    final_score: int
    lines_total: int
    level: int
    player_type: PlayerType
    advisor_available: Optional[bool]


class GameSession:
    """Drives one board through play, pause and game over.

    Every public operation dispatches on the type of the current state through the
    tables at the bottom of the class. `tick` and `handle` never block, with two
    bounded exceptions: the high-score submission on entering game over
    (`settings.ledger_timeout`) and, in advisor-driven play, the advisor request
    made when a new piece needs a plan (connect plus read timeout of the client).
    """

    def __init__(
        self,
        board: GameBoard,
        settings: Optional[GameSettings] = None,
        ledger: Optional[ScoreLedger] = None,
        search: Optional[TetrisAI] = None,
        advisor: Optional[AdvisorClient] = None,
        rules: Optional[ScoringRules] = None,
    ) -> None:
        self.board = board
        self.settings = settings or GameSettings(width=board.width, height=board.height)
        self.ledger = ledger
        self.search = search or TetrisAI()
        self.advisor = advisor
        self.rules = rules or ScoringRules()

        self.score = 0
        self.final_score = 0
        self.lines_total = 0
        self.cleared_lines_last_tick = 0
        self.state: SessionState = self._initial_state()

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------
    @property
    def player_type(self) -> PlayerType:
        return self.settings.player_type

    @property
    def ui_state(self) -> UiState:
        return UI_STATES[type(self.state)]

    def start(self) -> None:
        self._START[type(self.state)](self, self.state)

    def tick(self) -> None:
        self._TICK[type(self.state)](self, self.state)

    def handle(self, intent: Intent) -> None:
        self._HANDLE[type(self.state)](self, self.state, intent)

    def toggle_pause(self) -> None:
        self._TOGGLE_PAUSE[type(self.state)](self, self.state)

    def restart(self) -> None:
        """Fresh board and score, in the variant matching the configured player type."""
        logger.info("restarting session (%s)", self.player_type.value)
        self._reset_score()
        self.state = self._initial_state()
        self.board.reset()
        self.start()

    def reset(self) -> None:
        """Empty the board and zero the score, keeping the current variant."""
        self._reset_score()
        planner = planner_of(self.state)
        if planner is not None:
            planner.reset()
        self.board.reset()

    def set_player_type(self, player_type: PlayerType) -> None:
        self.settings.player_type = PlayerType(player_type)
        self.state = self._initial_state()

    def take_cleared_lines(self) -> int:
        lines = self.cleared_lines_last_tick
        self.cleared_lines_last_tick = 0
        return lines

    def submit_score(self, name: Optional[str] = None) -> bool:
        """Send the accumulated score to the ledger now and zero it."""
        score, self.score = self.score, 0
        if score <= 0:
            return False
        return self._submit(name or self.settings.player_name, score)

    @property
    def advisor_available(self) -> Optional[bool]:
        state = self.state.resume if isinstance(self.state, Paused) else self.state
        if isinstance(state, ExternalPlaying):
            return state.planner.available
        return None

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            board=self.board.snapshot(),
            ui_state=self.ui_state,
            score=self.score,
            final_score=self.final_score,
            lines_total=self.lines_total,
            level=self.settings.level,
            player_type=self.player_type,
            advisor_available=self.advisor_available,
        )

    # ------------------------------------------------------------------
    # Construction of variants
    # ------------------------------------------------------------------
    def _advisor_client(self) -> AdvisorClient:
        if self.advisor is None:
            self.advisor = AdvisorClient(self.settings.advisor_host, self.settings.advisor_port)
        return self.advisor

    def _initial_state(self) -> ActiveState:
        fast = self.settings.fast
        if self.player_type is PlayerType.AI:
            return AIPlaying(MovePlanner(self.search), speed=AI_SPEED_FAST if fast else AI_SPEED_NORMAL)
        if self.player_type is PlayerType.EXTERNAL:
            return ExternalPlaying(
                AdvisorPlanner(self._advisor_client()),
                speed=EXTERNAL_SPEED_FAST if fast else EXTERNAL_SPEED_NORMAL,
            )
        return Playing()

    # ------------------------------------------------------------------
    # Shared mechanics
    # ------------------------------------------------------------------
    def _reset_score(self) -> None:
        self.score = 0
        self.lines_total = 0
        self.cleared_lines_last_tick = 0

    def _record_cleared(self, lines: int) -> None:
        self.cleared_lines_last_tick = lines
        if lines > 0:
            self.lines_total += lines
            self.score += self.rules.score_for_lines(lines, self.settings.level)

    def _spawn_next(self, state: ActiveState) -> None:
        if not self.board.spawn():
            self._game_over("spawn blocked")
            return
        planner = planner_of(state)
        if planner is not None:
            planner.plan(self.board)

    def _land(self, state: ActiveState) -> None:
        """Lock the landed piece, clear lines, spawn the next one."""
        planner = planner_of(state)
        if planner is not None:
            planner.on_piece_placed()
        if not self.board.lock_current():
            self._game_over("lock overflow")
            return
        self._record_cleared(self.board.clear_full_lines())
        self._spawn_next(state)

    def _gravity(self, state: ActiveState) -> None:
        if self.board.current is None:
            # After reset() the board has no piece until the next tick.
            self._spawn_next(state)
        elif not self.board.soft_drop_step():
            self._land(state)

    def _apply(self, state: ActiveState, intent: Intent) -> None:
        board = self.board
        if intent is Intent.MOVE_LEFT:
            board.move_left()
        elif intent is Intent.MOVE_RIGHT:
            board.move_right()
        elif intent is Intent.ROTATE_CW:
            board.rotate_cw()
        elif intent is Intent.SOFT_DROP:
            board.soft_drop_step()
        elif intent is Intent.HARD_DROP and board.current is not None:
            board.hard_drop()
            self._land(state)

    def _run_planned_intent(self, state) -> None:
        state.tick_counter += 1
        if state.tick_counter < state.speed:
            return
        state.tick_counter = 0
        intent = state.planner.next_intent(self.board)
        if intent is not None:
            self._apply(state, intent)

    def _game_over(self, reason: str) -> None:
        self.state = GameOver()
        self.final_score = self.score
        logger.info("game over (%s), score=%d, lines=%d", reason, self.score, self.lines_total)
        score, self.score = self.score, 0
        if score > 0:
            self._submit(self.settings.player_name, score)

    def _submit(self, name: str, score: int) -> bool:
        if self.ledger is None:
            return False
        try:
            return self.ledger.submit(name, score, timeout=self.settings.ledger_timeout)
        except RuntimeError as exc:
            # Executor already shut down.
            logger.warning("could not submit score %d: %s", score, exc)
            return False

    # ------------------------------------------------------------------
    # Per-variant behaviour
    # ------------------------------------------------------------------
    def _start_active(self, state: ActiveState) -> None:
        planner = planner_of(state)
        if planner is not None:
            planner.reset()
            state.tick_counter = 0
        self._spawn_next(state)

    def _tick_playing(self, state: Playing) -> None:
        self._gravity(state)

    def _tick_ai(self, state: AIPlaying) -> None:
        state.planner.plan(self.board)
        self._run_planned_intent(state)
        if self.state is state:
            self._gravity(state)

    def _tick_external(self, state: ExternalPlaying) -> None:
        if self.board.current is None:
            # After reset() the freeze only applies once a piece is on the board.
            self._spawn_next(state)
            if self.state is not state:
                return
        state.planner.plan(self.board)
        if not state.planner.available:
            # Frozen until the advisor answers again.
            state.tick_counter = 0
            return
        self._run_planned_intent(state)
        if self.state is state:
            self._gravity(state)

    def _handle_active(self, state: ActiveState, intent: Intent) -> None:
        self._apply(state, intent)

    def _handle_external(self, state: ExternalPlaying, intent: Intent) -> None:
        if state.planner.available:
            self._apply(state, intent)

    def _pause(self, state: ActiveState) -> None:
        self.state = Paused(resume=state)

    def _resume(self, state: Paused) -> None:
        self.state = state.resume if state.resume is not None else self._initial_state()

    def _ignore(self, state: SessionState, *args) -> None:
        pass

    _START: Dict[Type, Callable] = {
        Playing: _start_active,
        AIPlaying: _start_active,
        ExternalPlaying: _start_active,
        Paused: _ignore,
        GameOver: _ignore,
    }
    _TICK: Dict[Type, Callable] = {
        Playing: _tick_playing,
        AIPlaying: _tick_ai,
        ExternalPlaying: _tick_external,
        Paused: _ignore,
        GameOver: _ignore,
    }
    _HANDLE: Dict[Type, Callable] = {
        Playing: _handle_active,
        AIPlaying: _handle_active,
        ExternalPlaying: _handle_external,
        Paused: _ignore,
        GameOver: _ignore,
    }
    _TOGGLE_PAUSE: Dict[Type, Callable] = {
        Playing: _pause,
        AIPlaying: _pause,
        ExternalPlaying: _pause,
        Paused: _resume,
        GameOver: _ignore,
    }
