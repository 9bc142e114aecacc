"""Human agent: moves arrive from outside (a click or a prompt), never from intent()."""

from __future__ import annotations

from connect4.agents.base import Agent, Intent
from connect4.engine import GameState


class HumanAgent(Agent):
    def __init__(self, name: str = "Human") -> None:
        self.name = name

    @property
    def accepts_input(self) -> bool:
        return True

    def start_process(self, state: GameState) -> None:
        pass  # the orchestrator submits the chosen column directly

    def intent(self) -> Intent:
        return Intent.none()
