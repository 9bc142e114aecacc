"""Monte-Carlo rollout agent: random playouts per column on a background thread."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

import numpy as np

from connect4.agents.base import Agent, Intent
from connect4.engine import COLS, GameState, Player, legal_moves
from connect4.errors import SearchFailure

_LOGGER = logging.getLogger(__name__)

WIN_SCORE = 1.0
LOSE_SCORE = 5.0
# Fixed scores for columns that are decided without simulating. Rollout means
# always lie strictly between them: win weights are < 1 and losses >= -LOSE.
IMMEDIATE_WIN_SCORE = WIN_SCORE
ILLEGAL_SCORE = -2.0 * LOSE_SCORE

TIE_EPSILON = float(np.finfo(np.float32).eps)


@dataclass(frozen=True)
class RolloutConfig:
    iterations: int = 250  # playouts per candidate column
    depth: int = 5  # plies per playout, counting the candidate move

    def validate(self) -> None:
        if self.iterations < 1:
            raise ValueError("iterations must be >= 1")
        if self.depth < 1:
            raise ValueError("depth must be >= 1")


def playout(state: GameState, me: Player, depth: int, rng: np.random.Generator) -> float:
    """
    Play random legal moves from ``state`` for up to ``depth - 1`` plies.

    A win is weighted by ``(depth - ply) / depth`` so that quick wins count
    more than late ones, and late losses hurt less than early ones.
    """

    game = state.copy()
    for ply in range(1, depth):
        legal = legal_moves(game)
        if len(legal) == 0:
            break

        result = game.play_col(int(rng.choice(legal)))
        if result.is_win:
            coef = (depth - ply) / depth
            # play_col already passed the turn: if it is mine again, the
            # opponent made the winning move.
            if game.player_turn() == me:
                return -LOSE_SCORE * coef
            return WIN_SCORE * coef
    return 0.0


def score_columns(state: GameState, config: RolloutConfig, rng: np.random.Generator) -> np.ndarray:
    me = state.player_turn()
    scores = np.zeros((COLS,), dtype=np.float32)

    for col in range(COLS):
        start = state.copy()
        result = start.play_col(col)
        if result.is_error:
            scores[col] = ILLEGAL_SCORE
            continue
        if result.is_win:
            scores[col] = IMMEDIATE_WIN_SCORE
            continue

        total = 0.0
        for _ in range(config.iterations):
            total += playout(start, me, config.depth, rng)
        scores[col] = total / config.iterations

    return scores


def choose_column(scores: np.ndarray, rng: np.random.Generator) -> int:
    """Uniform choice among the columns whose score is within epsilon of the best."""
    best = float(scores.max())
    candidates = np.flatnonzero(best - scores <= TIE_EPSILON)
    return int(rng.choice(candidates))


def search(state: GameState, config: RolloutConfig, rng: np.random.Generator) -> int:
    scores = score_columns(state, config, rng)
    col = choose_column(scores, rng)
    _LOGGER.debug("rollout scores %s -> column %d", np.round(scores, 3).tolist(), col)
    return col


class _SearchWorker(threading.Thread):
    """Dedicated thread owning its own copy of the position."""

    def __init__(self, state: GameState, config: RolloutConfig, seed: int) -> None:
        super().__init__(name="rollout-search", daemon=True)
        self._state = state
        self._config = config
        self._seed = seed
        self.column: Optional[int] = None
        self.error: Optional[BaseException] = None

    def run(self) -> None:
        try:
            self.column = search(self._state, self._config, np.random.default_rng(self._seed))
        except Exception as exc:
            # Re-raised on the polling thread by RolloutAgent.intent().
            self.error = exc


class RolloutAgent(Agent):
    """
    Flat Monte-Carlo agent.

    Every column is scored by the mean outcome of ``iterations`` random
    playouts of at most ``depth`` plies; full columns and immediate wins are
    scored without simulating. The search runs on one background thread per
    turn, and ``intent`` never blocks except to reap a finished thread.
    """

    def __init__(
        self,
        name: str = "Rollout",
        config: Optional[RolloutConfig] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.name = name
        self.config = config or RolloutConfig()
        self.config.validate()
        self.rng = np.random.default_rng(seed)
        self._worker: Optional[_SearchWorker] = None

    @property
    def busy(self) -> bool:
        return self._worker is not None

    def start_process(self, state: GameState) -> None:
        if self._worker is not None:
            # Callers must drain the previous search first.
            _LOGGER.warning("%s: start_process while a search is outstanding", self.name)

        _LOGGER.debug(
            "%s: searching for %s (iterations=%d depth=%d)",
            self.name,
            state.player_turn().name,
            self.config.iterations,
            self.config.depth,
        )
        worker = _SearchWorker(state.copy(), self.config, int(self.rng.integers(2**32)))
        self._worker = worker
        worker.start()

    def intent(self) -> Intent:
        worker = self._worker
        if worker is None:
            return Intent.none()
        if worker.is_alive():
            return Intent.waiting()

        worker.join()
        self._worker = None
        if worker.error is not None or worker.column is None:
            raise SearchFailure(f"{self.name}: rollout search failed") from worker.error
        return Intent.ready(worker.column)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the outstanding search finishes. Returns False on timeout."""
        worker = self._worker
        if worker is None:
            return True
        worker.join(timeout)
        return not worker.is_alive()
