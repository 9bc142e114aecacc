"""Connect-4 rules engine: a fixed 7x6 board with incremental win detection."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

_LOGGER = logging.getLogger(__name__)

COLS = 7
ROWS = 6
CONNECT = 4

EMPTY = 0

# (dcol, drow): vertical, horizontal, rising diagonal, falling diagonal.
_DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (1, 1), (1, -1))

Cell = Tuple[int, int]  # (col, row), row 0 is the bottom


class Player(enum.IntEnum):
    RED = 1
    YELLOW = 2

    @property
    def other(self) -> "Player":
        return Player.YELLOW if self is Player.RED else Player.RED


class _Turn(enum.Enum):
    """
    Turn memory: (player who started this game, player to move).

    Keeping the starter alongside the mover lets ``restart`` hand the first
    move of the next game to the other player without any extra field.
    """

    RED_RED = (Player.RED, Player.RED)
    RED_YELLOW = (Player.RED, Player.YELLOW)
    YELLOW_RED = (Player.YELLOW, Player.RED)
    YELLOW_YELLOW = (Player.YELLOW, Player.YELLOW)

    @property
    def starter(self) -> Player:
        return self.value[0]

    @property
    def mover(self) -> Player:
        return self.value[1]

    def advance(self) -> "_Turn":
        return _Turn((self.starter, self.mover.other))

    def next_game(self) -> "_Turn":
        starter = self.starter.other
        return _Turn((starter, starter))


class PlayKind(enum.Enum):
    PASS = "pass"
    ERROR = "error"
    WIN = "win"


@dataclass(frozen=True)
class PlayResult:
    kind: PlayKind
    line: Optional[Tuple[Cell, Cell]] = None  # endpoints of the winning run

    @property
    def is_win(self) -> bool:
        return self.kind is PlayKind.WIN

    @property
    def is_error(self) -> bool:
        return self.kind is PlayKind.ERROR


PASS = PlayResult(PlayKind.PASS)
ERROR = PlayResult(PlayKind.ERROR)


class GameState:
    """
    Board plus whose turn it is.

    The grid is stored column-major (``index = col * ROWS + row``) so each
    column is a contiguous slice, filled from row 0 upward. The object is
    small and meant to be copied freely; the only mutators are ``play_col``
    and ``restart``.
    """

    COLS = COLS
    ROWS = ROWS

    __slots__ = ("_grid", "_turn")

    def __init__(self) -> None:
        self._grid = np.zeros((COLS * ROWS,), dtype=np.int8)
        self._turn = _Turn.RED_RED

    def copy(self) -> "GameState":
        clone = GameState.__new__(GameState)
        clone._grid = self._grid.copy()
        clone._turn = self._turn
        return clone

    __copy__ = copy

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameState):
            return NotImplemented
        return self._turn is other._turn and np.array_equal(self._grid, other._grid)

    def __repr__(self) -> str:
        return f"GameState(turn={self.player_turn().name}, moves={self.moves_played()})"

    def play_col(self, col: int) -> PlayResult:
        if col < 0 or col >= COLS:
            raise ValueError(f"col out of range: {col}")

        row = self.column_height(col)
        if row == ROWS:
            _LOGGER.debug("illegal move: column %d is full", col)
            return ERROR

        mover = self._turn.mover
        self._grid[col * ROWS + row] = mover
        self._turn = self._turn.advance()

        line = self._winning_line(col, row, mover)
        if line is None:
            return PASS
        return PlayResult(PlayKind.WIN, line)

    def column_height(self, col: int) -> int:
        # First empty cell from the bottom; pieces never float.
        filled = self._grid[col * ROWS : (col + 1) * ROWS] != EMPTY
        if filled.all():
            return ROWS
        return int(np.argmin(filled))

    def column_full(self, col: int) -> bool:
        return self.column_height(col) == ROWS

    def legal_columns(self) -> np.ndarray:
        tops = self._grid[ROWS - 1 :: ROWS]
        return np.flatnonzero(tops == EMPTY)

    def is_full(self) -> bool:
        return bool(np.all(self._grid != EMPTY))

    def moves_played(self) -> int:
        return int(np.count_nonzero(self._grid))

    def grid(self) -> Tuple[Optional[Player], ...]:
        return tuple(Player(int(v)) if v != EMPTY else None for v in self._grid)

    def cell(self, col: int, row: int) -> Optional[Player]:
        v = int(self._grid[col * ROWS + row])
        return Player(v) if v != EMPTY else None

    def player_turn(self) -> Player:
        return self._turn.mover

    def starter(self) -> Player:
        return self._turn.starter

    def restart(self) -> None:
        self._grid[:] = EMPTY
        self._turn = self._turn.next_game()

    def _matches(self, col: int, row: int, player: Player) -> bool:
        if not (0 <= col < COLS and 0 <= row < ROWS):
            return False
        return int(self._grid[col * ROWS + row]) == player

    def _winning_line(self, col: int, row: int, player: Player) -> Optional[Tuple[Cell, Cell]]:
        """
        Check the four lines through the piece just placed at (col, row).

        Walk backward at most CONNECT-1 steps, then forward at most the
        remainder. Exactly CONNECT-1 steps in total means the placed piece
        completed a run of CONNECT.
        """

        reach = CONNECT - 1
        for dc, dr in _DIRECTIONS:
            b = 0
            while b < reach and self._matches(col - (b + 1) * dc, row - (b + 1) * dr, player):
                b += 1
            f = 0
            while f < reach - b and self._matches(col + (f + 1) * dc, row + (f + 1) * dr, player):
                f += 1
            if b + f == reach:
                return (col - b * dc, row - b * dr), (col + f * dc, row + f * dr)
        return None


def legal_moves(s: GameState) -> np.ndarray:
    return s.legal_columns()
