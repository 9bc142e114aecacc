"""Random baseline agent."""

from __future__ import annotations

import logging
import random
from typing import Optional

from connect4.agents.base import Agent, Intent
from connect4.engine import GameState, legal_moves

_LOGGER = logging.getLogger(__name__)

DEFAULT_COLUMN = 3

# Marks the last choice as already handed out; never a valid column.
_CONSUMED = -1


class RandomAgent(Agent):
    def __init__(self, name: str = "Random", seed: Optional[int] = None) -> None:
        self.name = name
        self.rng = random.Random(seed)
        self._choice = _CONSUMED

    def start_process(self, state: GameState) -> None:
        legal = legal_moves(state).tolist()
        if not legal:
            _LOGGER.warning("%s asked to move on a full board; falling back to column %d", self.name, DEFAULT_COLUMN)
            self._choice = DEFAULT_COLUMN
            return
        self._choice = self.rng.choice(legal)

    def intent(self) -> Intent:
        if self._choice == _CONSUMED:
            return Intent.none()
        col, self._choice = self._choice, _CONSUMED
        return Intent.ready(col)
