"""Connect-4 package (engine + agents + CLI)."""

from connect4.engine import COLS, ROWS, GameState, Player, PlayKind, PlayResult

__all__ = ["COLS", "ROWS", "GameState", "Player", "PlayKind", "PlayResult"]
