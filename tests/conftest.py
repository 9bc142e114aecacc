"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Type

import pytest

from connect4.agents.base import Agent, Intent
from connect4.engine import COLS, ROWS, GameState, PlayResult

# A full-board game with no four-in-a-row anywhere; the last move is Yellow's.
DRAW_SEQUENCE = (
    [0, 1, 0, 1, 2, 3, 2, 3, 4, 5, 4, 5]
    + [6, 0, 6, 0, 1, 2, 1, 2, 3, 4, 3, 4]
    + [5, 6, 5, 6]
    + [0, 1, 0, 1, 2, 3, 2, 3, 4, 5, 4, 5]
    + [6, 6]
)


class ScriptedAgent(Agent):
    """Plays a fixed list of columns, one per turn."""

    def __init__(self, moves: Iterable[int], name: str = "Scripted") -> None:
        self.name = name
        self.moves: List[int] = list(moves)
        self.started: List[GameState] = []
        self._pending: Optional[int] = None

    def start_process(self, state: GameState) -> None:
        self.started.append(state)
        self._pending = self.moves.pop(0)

    def intent(self) -> Intent:
        if self._pending is None:
            return Intent.none()
        col, self._pending = self._pending, None
        return Intent.ready(col)


def _play(state: GameState, cols: Iterable[int]) -> List[PlayResult]:
    return [state.play_col(c) for c in cols]


def _fill_except(state: GameState, open_cols: Iterable[int]) -> GameState:
    keep = set(open_cols)
    for col in range(COLS):
        if col in keep:
            continue
        for _ in range(ROWS):
            state.play_col(col)
    return state


@pytest.fixture
def state() -> GameState:
    return GameState()


@pytest.fixture
def play() -> Callable[[GameState, Iterable[int]], List[PlayResult]]:
    """Apply a sequence of columns, returning each play result."""
    return _play


@pytest.fixture
def fill_except() -> Callable[..., GameState]:
    """Fill every column (ignoring any wins on the way) except ``open_cols``."""
    return _fill_except


@pytest.fixture
def scripted() -> Type[ScriptedAgent]:
    return ScriptedAgent


@pytest.fixture
def draw_sequence() -> List[int]:
    return list(DRAW_SEQUENCE)
