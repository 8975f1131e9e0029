#!/usr/bin/env python3
"""Compute hand strength and win probability on a complete board."""

import argparse
import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from pokerodds.errors import Failure, PokerOddsError
from pokerodds.game.cards import parse_cards
from pokerodds.game.equity import EquityConfig, HandAnalysis, try_analyze
from pokerodds.game.evaluator import HandCategory, Outcome, describe
from pokerodds.game.players import HERO_ID, Player


def main():
    parser = argparse.ArgumentParser(
        description="Texas Hold'em win probability calculator"
    )
    parser.add_argument(
        "-c", "--cards",
        required=True,
        help="Your hole cards (e.g., 'AsAh' or 'AS AH')",
    )
    parser.add_argument(
        "-b", "--board",
        required=True,
        help="All five community cards (e.g., 'KsKhKd2c3d')",
    )
    parser.add_argument(
        "-n", "--opponents",
        type=int,
        default=1,
        help="Number of opponents with unknown cards (default: 1)",
    )
    parser.add_argument(
        "-k", "--known",
        action="append",
        default=[],
        help="Known opponent hole cards, repeatable (e.g., -k QhQd -k 7c7d)",
    )
    parser.add_argument(
        "--parallel",
        action="store_true",
        help="Spread the enumeration over worker processes",
    )
    parser.add_argument(
        "-w", "--workers",
        type=int,
        default=None,
        help="Maximum worker processes (default: CPU count)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args()
    console = Console()

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )

    try:
        hero = parse_cards(args.cards)
        board = parse_cards(args.board)
        players = [Player(HERO_ID, hero)]
        seat = 1
        for label in args.known:
            players.append(Player(seat, parse_cards(label), cards_visible=True))
            seat += 1
        for _ in range(args.opponents):
            players.append(Player(seat))
            seat += 1
    except PokerOddsError as e:
        result = Failure.from_error(e)
    else:
        config = EquityConfig(parallel=args.parallel, max_workers=args.workers)
        result = try_analyze(hero, board, players, config)

    if isinstance(result, Failure):
        if args.json:
            console.print_json(json.dumps(result.to_dict()))
        else:
            console.print(Panel(
                result.message,
                title=f"[bold red]{result.kind}[/]",
                border_style="red",
            ))
        return 1

    if args.json:
        console.print_json(json.dumps(result.to_dict()))
    else:
        _display_analysis(console, result)
    return 0


def _display_analysis(console: Console, analysis: HandAnalysis) -> None:
    """Display hand analysis."""
    label = analysis.label
    if analysis.category == HandCategory.ROYAL_FLUSH:
        label = f"[bold magenta]{label}[/]"
    else:
        label = f"[bold]{label}[/]"

    lines = [
        f"[bold]Your Hand:[/] {' '.join(map(str, analysis.hero_cards))}",
        f"[bold]Community Cards:[/] {' '.join(map(str, analysis.community))}",
        f"[bold]Best Five-Card Hand:[/] {analysis.best_hand} ({label})",
        f"[dim]{describe(analysis.score)}[/]",
        f"[bold]Active Players:[/] {analysis.active_players}",
        f"[bold]Probability of Winning:[/] [bold yellow]{analysis.probability:.2%}[/]",
    ]
    if analysis.tally is not None:
        t = analysis.tally
        lines.append(
            f"[dim]Heads-up vs random: {t.wins} wins, {t.ties} ties, "
            f"{t.losses} losses of {t.total}[/]"
        )

    console.print(Panel("\n".join(lines), title="[bold]Hand Analysis[/]", border_style="green"))

    if not analysis.opponents:
        return

    table = Table(title="Known Opponent Hands")
    table.add_column("Player", style="cyan")
    table.add_column("Cards")
    table.add_column("Best Hand")
    table.add_column("Result", justify="right")

    colors = {Outcome.WIN: "green", Outcome.LOSS: "red", Outcome.TIE: "yellow"}
    text = {Outcome.WIN: "You Win", Outcome.LOSS: "You Lose", Outcome.TIE: "Tie"}
    for opp in analysis.opponents:
        color = colors[opp.outcome]
        table.add_row(
            opp.name,
            " ".join(map(str, opp.cards)),
            opp.label,
            f"[{color}]{text[opp.outcome]}[/]",
        )

    console.print(table)


if __name__ == "__main__":
    sys.exit(main())
