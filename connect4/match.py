"""Headless turn loop: one GameState, one agent per player, polled once per tick."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from connect4.agents.base import Agent
from connect4.engine import Cell, GameState, Player, PlayResult
from connect4.errors import ProtocolError

_LOGGER = logging.getLogger(__name__)

InputFn = Callable[[GameState, Agent], int]


@dataclass(frozen=True)
class GameRecord:
    starter: Player
    winner: Optional[Player]  # None for a draw
    line: Optional[Tuple[Cell, Cell]]
    moves: Tuple[int, ...]


class Match:
    """
    Drives the agent protocol the way a rendering loop would.

    When a player's turn begins the match hands that player's agent a copy of
    the state (``start_process``); each ``tick`` then polls the agent's intent
    once and applies a ready column. Agents that accept input get their moves
    through ``submit`` instead.
    """

    def __init__(self, red: Agent, yellow: Agent, state: Optional[GameState] = None) -> None:
        self.state = state if state is not None else GameState()
        self.agents: Dict[Player, Agent] = {Player.RED: red, Player.YELLOW: yellow}
        self._starter = self.state.starter()
        self._winner: Optional[Player] = None
        self._line: Optional[Tuple[Cell, Cell]] = None
        self._draw = False
        self._history: List[int] = []
        self.begin_turn()

    @property
    def agent(self) -> Agent:
        return self.agents[self.state.player_turn()]

    @property
    def winner(self) -> Optional[Player]:
        return self._winner

    @property
    def line(self) -> Optional[Tuple[Cell, Cell]]:
        return self._line

    @property
    def is_draw(self) -> bool:
        return self._draw

    @property
    def is_over(self) -> bool:
        return self._winner is not None or self._draw

    @property
    def history(self) -> Tuple[int, ...]:
        return tuple(self._history)

    def begin_turn(self) -> None:
        if self.is_over:
            return
        self.agent.start_process(self.state.copy())

    def tick(self) -> Optional[PlayResult]:
        """Poll the current agent once. Returns the play result if a move was made."""
        if self.is_over:
            return None

        intent = self.agent.intent()
        if not intent.is_ready:
            return None

        result = self._apply(intent.column)
        if result.is_error:
            raise ProtocolError(f"{self.agent.name} chose full column {intent.column}")
        return result

    def submit(self, col: int) -> PlayResult:
        """Apply an externally chosen column for an agent that accepts input."""
        if self.is_over:
            raise ProtocolError("game is over")
        if not self.agent.accepts_input:
            raise ProtocolError(f"{self.agent.name} does not accept external moves")
        return self._apply(col)

    def restart(self) -> None:
        """Drain outstanding decisions, then start the next game with the other starter."""
        for agent in self.agents.values():
            while agent.intent().is_waiting:
                time.sleep(0.001)

        self.state.restart()
        self._starter = self.state.starter()
        self._winner = None
        self._line = None
        self._draw = False
        self._history.clear()
        self.begin_turn()

    def record(self) -> GameRecord:
        return GameRecord(
            starter=self._starter,
            winner=self._winner,
            line=self._line,
            moves=self.history,
        )

    def play_out(self, input_fn: Optional[InputFn] = None, poll_interval: float = 0.001) -> GameRecord:
        """Run the game to completion; ``input_fn`` supplies moves for input-driven agents."""
        while not self.is_over:
            agent = self.agent
            if agent.accepts_input:
                if input_fn is None:
                    raise ProtocolError(f"{agent.name} needs input but no input function was given")
                self.submit(input_fn(self.state.copy(), agent))
                continue

            if self.tick() is None:
                time.sleep(poll_interval)

        return self.record()

    def _apply(self, col: int) -> PlayResult:
        mover = self.state.player_turn()
        result = self.state.play_col(col)
        if result.is_error:
            return result

        self._history.append(col)
        if result.is_win:
            self._winner = mover
            self._line = result.line
            _LOGGER.info("%s (%s) wins with %s", self.agents[mover].name, mover.name, result.line)
        elif self.state.is_full():
            self._draw = True
            _LOGGER.info("draw after %d moves", len(self._history))
        else:
            self.begin_turn()
        return result
