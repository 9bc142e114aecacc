"""Abstract base class for Connect-4 agents and the intent they report."""

from __future__ import annotations

import abc
import enum
from dataclasses import dataclass
from typing import Optional

from connect4.engine import GameState


class IntentStatus(enum.Enum):
    NONE = "none"  # nothing pending, or waiting on external input
    WAITING = "waiting"  # a decision is being computed
    READY = "ready"  # a column is available


@dataclass(frozen=True)
class Intent:
    status: IntentStatus
    column: Optional[int] = None

    @classmethod
    def none(cls) -> "Intent":
        return _NONE

    @classmethod
    def waiting(cls) -> "Intent":
        return _WAITING

    @classmethod
    def ready(cls, column: int) -> "Intent":
        return cls(IntentStatus.READY, int(column))

    @property
    def is_ready(self) -> bool:
        return self.status is IntentStatus.READY

    @property
    def is_waiting(self) -> bool:
        return self.status is IntentStatus.WAITING


_NONE = Intent(IntentStatus.NONE)
_WAITING = Intent(IntentStatus.WAITING)


class Agent(abc.ABC):
    """
    Decides moves for one player without blocking the caller.

    The orchestrator calls ``start_process`` once when the agent's turn
    begins, then polls ``intent`` (e.g. once per rendered frame) until it
    reports a ready column.
    """

    name: str

    @property
    def accepts_input(self) -> bool:
        """Whether moves for this agent come from external input (clicks, prompts)."""
        return False

    @abc.abstractmethod
    def start_process(self, state: GameState) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def intent(self) -> Intent:
        raise NotImplementedError
