"""Agent implementations for Connect-4."""

from typing import Optional

from connect4.agents.base import Agent, Intent, IntentStatus
from connect4.agents.human import HumanAgent
from connect4.agents.random_agent import RandomAgent
from connect4.agents.rollout import RolloutAgent, RolloutConfig

AGENT_KINDS = ("human", "random", "rollout")


def make_agent(
    kind: str,
    name: Optional[str] = None,
    *,
    seed: Optional[int] = None,
    rollout: Optional[RolloutConfig] = None,
) -> Agent:
    if kind == "human":
        return HumanAgent(name or "Human")
    if kind == "random":
        return RandomAgent(name or "Random", seed=seed)
    if kind == "rollout":
        return RolloutAgent(name or "Rollout", config=rollout, seed=seed)

    raise ValueError(f"unsupported agent choice: {kind}")


__all__ = [
    "AGENT_KINDS",
    "Agent",
    "HumanAgent",
    "Intent",
    "IntentStatus",
    "RandomAgent",
    "RolloutAgent",
    "RolloutConfig",
    "make_agent",
]
