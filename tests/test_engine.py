"""Tests for GameState: placement, win detection, turn memory."""

import copy

import pytest

from connect4.engine import COLS, ROWS, GameState, Player, PlayKind


class TestPlacement:
    def test_initial_state(self, state: GameState) -> None:
        assert state.player_turn() == Player.RED
        assert state.starter() == Player.RED
        assert state.grid() == (None,) * (COLS * ROWS)
        assert state.moves_played() == 0

    def test_piece_lands_at_bottom(self, state: GameState) -> None:
        assert state.play_col(2).kind is PlayKind.PASS
        assert state.cell(2, 0) == Player.RED
        assert state.grid()[2 * ROWS] == Player.RED

    def test_turn_alternates(self, state: GameState) -> None:
        state.play_col(0)
        assert state.player_turn() == Player.YELLOW
        state.play_col(0)
        assert state.player_turn() == Player.RED
        assert state.cell(0, 1) == Player.YELLOW

    def test_column_height_monotonic(self, state: GameState) -> None:
        heights = []
        for _ in range(ROWS):
            state.play_col(5)
            heights.append(state.column_height(5))
        assert heights == list(range(1, ROWS + 1))
        assert state.column_full(5)

    def test_full_column_is_error_and_no_op(self, state: GameState, play) -> None:
        play(state, [1] * ROWS)
        before = state.grid()
        turn = state.player_turn()

        result = state.play_col(1)

        assert result.is_error
        assert result.line is None
        assert state.grid() == before
        assert state.player_turn() == turn

    @pytest.mark.parametrize("col", [-1, COLS, 100])
    def test_out_of_range_column_raises(self, state: GameState, col: int) -> None:
        with pytest.raises(ValueError):
            state.play_col(col)

    def test_legal_columns(self, state: GameState, fill_except) -> None:
        fill_except(state, [2, 5])
        assert state.legal_columns().tolist() == [2, 5]
        assert not state.is_full()

    def test_is_full(self, state: GameState, fill_except) -> None:
        fill_except(state, [])
        assert state.is_full()
        assert len(state.legal_columns()) == 0

    def test_copy_is_independent(self, state: GameState) -> None:
        state.play_col(3)
        clone = state.copy()
        shallow = copy.copy(state)
        clone.play_col(3)

        assert state.column_height(3) == 1
        assert clone.column_height(3) == 2
        assert shallow == state
        assert clone != state


class TestWinDetection:
    def test_vertical(self, state: GameState, play) -> None:
        results = play(state, [3, 4, 3, 4, 3, 4, 3])
        assert all(r.kind is PlayKind.PASS for r in results[:-1])
        assert results[-1].is_win
        assert results[-1].line == ((3, 0), (3, 3))

    def test_three_is_not_a_win(self, state: GameState, play) -> None:
        results = play(state, [3, 4, 3, 4, 3])
        assert results[-1].kind is PlayKind.PASS

    def test_horizontal_completed_at_end(self, state: GameState, play) -> None:
        results = play(state, [0, 0, 1, 1, 2, 2, 3])
        assert results[-1].line == ((0, 0), (3, 0))

    def test_horizontal_completed_in_middle(self, state: GameState, play) -> None:
        results = play(state, [0, 0, 1, 1, 3, 3, 2])
        assert results[-1].line == ((0, 0), (3, 0))

    def test_rising_diagonal(self, state: GameState, play) -> None:
        results = play(state, [0, 1, 1, 2, 3, 2, 2, 3, 6, 3, 3])
        assert all(not r.is_win for r in results[:-1])
        assert results[-1].line == ((0, 0), (3, 3))

    def test_falling_diagonal(self, state: GameState, play) -> None:
        results = play(state, [6, 5, 5, 4, 3, 4, 4, 3, 0, 3, 3])
        assert all(not r.is_win for r in results[:-1])
        assert results[-1].line == ((3, 3), (6, 0))

    def test_yellow_can_win(self, state: GameState, play) -> None:
        results = play(state, [0, 6, 1, 6, 0, 6, 1, 6])
        assert results[-1].is_win
        assert results[-1].line == ((6, 0), (6, 3))
        assert state.cell(6, 3) == Player.YELLOW

    def test_run_of_five_reports_four_cells(self, state: GameState, play) -> None:
        results = play(state, [0, 0, 1, 1, 3, 3, 4, 4, 2])
        assert results[-1].is_win
        (c0, r0), (c1, r1) = results[-1].line
        assert r0 == r1 == 0
        assert c1 - c0 == 3

    def test_full_board_without_win(self, state: GameState, play, draw_sequence) -> None:
        results = play(state, draw_sequence)
        assert not any(r.is_win or r.is_error for r in results)
        assert state.is_full()


class TestRestart:
    def test_restart_clears_grid(self, state: GameState, play) -> None:
        play(state, [0, 1, 2])
        state.restart()
        assert state.grid() == (None,) * (COLS * ROWS)

    def test_starter_alternates_across_games(self, state: GameState, play) -> None:
        starters = [state.player_turn()]
        for _ in range(3):
            play(state, [0, 1, 2])
            state.restart()
            assert state.player_turn() == state.starter()
            starters.append(state.player_turn())
        assert starters == [Player.RED, Player.YELLOW, Player.RED, Player.YELLOW]

    def test_starter_does_not_depend_on_move_count(self, state: GameState) -> None:
        state.play_col(0)  # Yellow to move when the game ends
        state.restart()
        assert state.player_turn() == Player.YELLOW
        state.restart()
        assert state.player_turn() == Player.RED
