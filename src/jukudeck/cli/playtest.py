"""CLI command for automated playtesting."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from jukudeck.cards.examples import create_sample_catalog
from jukudeck.cards.serialization import load_catalog
from jukudeck.playtest.session import PlaytestSession
from jukudeck.simulation.players import GreedyPlayer, RandomPlayer
from jukudeck.simulation.session import GameSession, SessionConfig
from jukudeck.simulation.snapshot import snapshot_from_json, snapshot_to_json

logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "-s", "--strategy",
    type=click.Choice(["random", "greedy"]),
    default="greedy",
    help="AI strategy that plays the game",
)
@click.option("--seed", type=int, default=None, help="Random seed for reproducibility")
@click.option(
    "--catalog",
    type=click.Path(exists=True),
    default=None,
    help="Card catalog JSON (built-in sample catalog if omitted)",
)
@click.option("--force-training", multiple=True, help="Card name to force into training offers")
@click.option("--force-hand", multiple=True, help="Card name to force into drawn hands")
@click.option("--save", "save_path", type=click.Path(), default=None, help="Write a snapshot after every step")
@click.option("--resume", is_flag=True, help="Resume from the --save snapshot if it exists")
@click.option("--results", type=click.Path(), default=None, help="Append the result as a JSON line")
@click.option("--debug", is_flag=True, help="Show parsed card effects")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(
    strategy: str,
    seed: int | None,
    catalog: str | None,
    force_training: tuple[str, ...],
    force_hand: tuple[str, ...],
    save_path: str | None,
    resume: bool,
    results: str | None,
    debug: bool,
    verbose: bool,
):
    """Play a full game with an AI player and print every step."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)

    cards = load_catalog(catalog) if catalog else create_sample_catalog()

    config = SessionConfig(
        seed=seed,
        forced_training_names=list(force_training),
        forced_hand_names=list(force_hand),
    )

    game = None
    if resume and save_path and Path(save_path).exists():
        try:
            data = snapshot_from_json(Path(save_path).read_text(encoding="utf-8"))
            game = GameSession.restore(data, cards, config)
            click.echo(f"Resumed from {save_path}")
        except (ValueError, json.JSONDecodeError) as e:
            click.echo(f"Cannot resume ({e}); starting a new game", err=True)
            game = None

    player = RandomPlayer(seed=config.seed) if strategy == "random" else GreedyPlayer()
    session = PlaytestSession(cards, config, player, debug=debug, session=game)

    if save_path:
        def _save(g: GameSession) -> None:
            Path(save_path).write_text(snapshot_to_json(g.snapshot()), encoding="utf-8")

        session.on_step = _save

    try:
        result = session.run(output_fn=click.echo)
    except KeyboardInterrupt:
        click.echo("\n\nGame interrupted.")
        sys.exit(1)

    if results:
        with open(results, "a", encoding="utf-8") as f:
            f.write(json.dumps(result.to_dict(), ensure_ascii=False) + "\n")
        click.echo(f"\nResult saved to {results}")

    if result.stuck_reason:
        sys.exit(1)


if __name__ == "__main__":
    main()
