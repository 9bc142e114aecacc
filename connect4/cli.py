"""CLI rendering and game runners for Connect-4."""

from __future__ import annotations

import logging
from collections import Counter
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from tqdm import trange

from connect4.agents import AGENT_KINDS, Agent, RolloutConfig, make_agent
from connect4.engine import COLS, ROWS, GameState, Player
from connect4.match import Match

console = Console()
app = typer.Typer(no_args_is_help=True)

_SYMBOLS = {Player.RED: "X", Player.YELLOW: "O", None: "."}


def render_board(s: GameState) -> str:
    lines: List[str] = []
    for r in range(ROWS - 1, -1, -1):
        lines.append(" ".join(_SYMBOLS[s.cell(c, r)] for c in range(COLS)))
    lines.append("-" * (2 * COLS - 1))
    lines.append(" ".join(str(c) for c in range(COLS)))
    return "\n".join(lines)


def _parse_column(raw: str) -> Optional[int]:
    raw = raw.strip()
    if not raw:
        return None
    try:
        col = int(raw)
    except ValueError:
        return None

    if 0 <= col < COLS:
        return col
    return None


def prompt_for_human_move(s: GameState, agent: Agent) -> int:
    console.print(render_board(s))
    legal = s.legal_columns().tolist()
    while True:
        raw = typer.prompt(f"{agent.name} ({_SYMBOLS[s.player_turn()]}) to move, column {legal}")
        col = _parse_column(raw)
        if col is None:
            console.print("Enter a column index between 0 and 6.")
            continue
        if col not in legal:
            console.print("Illegal move: column full.")
            continue
        return col


def _check_kind(kind: str) -> str:
    if kind not in AGENT_KINDS:
        raise typer.BadParameter(f"agent must be one of {', '.join(AGENT_KINDS)}")
    return kind


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _pick_seed(base: Optional[int], offset: int) -> Optional[int]:
    return None if base is None else base + offset


def _build_match(red: str, yellow: str, seed: Optional[int], cfg: RolloutConfig) -> Match:
    red_agent = make_agent(red, f"{red.capitalize()} X", seed=_pick_seed(seed, 0), rollout=cfg)
    yellow_agent = make_agent(yellow, f"{yellow.capitalize()} O", seed=_pick_seed(seed, 1), rollout=cfg)
    return Match(red_agent, yellow_agent)


@app.command()
def play(
    red: str = typer.Option("human", callback=_check_kind, help="agent for Red (X)"),
    yellow: str = typer.Option("rollout", callback=_check_kind, help="agent for Yellow (O)"),
    iterations: int = typer.Option(250, help="rollout playouts per column"),
    depth: int = typer.Option(5, help="rollout plies per playout"),
    seed: Optional[int] = typer.Option(None, help="base random seed"),
    log_level: str = typer.Option("warning", help="logging level"),
) -> None:
    """
    Play one game in the terminal. Human moves are read from a prompt.
    """
    _setup_logging(log_level)
    cfg = RolloutConfig(iterations=iterations, depth=depth)
    try:
        cfg.validate()
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    match = _build_match(red, yellow, seed, cfg)
    record = match.play_out(prompt_for_human_move)

    console.print(render_board(match.state))
    if record.winner is None:
        console.print("Result: draw")
    else:
        console.print(f"Result: {match.agents[record.winner].name} wins, line {record.line}")
    console.print(f"Moves: {' '.join(str(c) for c in record.moves)}")


@app.command()
def match(
    red: str = typer.Option("rollout", callback=_check_kind, help="agent for Red (X)"),
    yellow: str = typer.Option("random", callback=_check_kind, help="agent for Yellow (O)"),
    games: int = typer.Option(10, min=1, help="number of games, starters alternate"),
    iterations: int = typer.Option(250, help="rollout playouts per column"),
    depth: int = typer.Option(5, help="rollout plies per playout"),
    seed: Optional[int] = typer.Option(None, help="base random seed"),
    log_level: str = typer.Option("warning", help="logging level"),
) -> None:
    """
    Run a series of agent-vs-agent games and print a summary table.
    """
    _setup_logging(log_level)
    if "human" in (red, yellow):
        raise typer.BadParameter("match runs agents only; use `play` for human games")
    cfg = RolloutConfig(iterations=iterations, depth=depth)
    try:
        cfg.validate()
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    m = _build_match(red, yellow, seed, cfg)
    results: Counter = Counter()
    lengths: List[int] = []
    for g in trange(games, desc="games"):
        if g:
            m.restart()
        record = m.play_out()
        results[record.winner] += 1
        lengths.append(len(record.moves))

    table = Table(title=f"{games} games")
    table.add_column("player")
    table.add_column("agent")
    table.add_column("wins", justify="right")
    for player in Player:
        table.add_row(player.name, m.agents[player].name, str(results[player]))
    table.add_row("-", "draws", str(results[None]))
    console.print(table)
    console.print(f"average length: {sum(lengths) / len(lengths):.1f} moves")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
