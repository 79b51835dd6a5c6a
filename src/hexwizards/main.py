"""Command-line entrypoint: run the HTTP API or a headless AI-only game."""

from __future__ import annotations

import argparse
import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

import uvicorn

from hexwizards.config import Settings, get_settings
from hexwizards.domain.ai import RandomPolicy
from hexwizards.domain.events import EventBus, GameEvent
from hexwizards.domain.rules_config import RulesConfig, TurnRules
from hexwizards.domain.setup import build_controller
from hexwizards.domain.terrain import MapSpecification
from hexwizards.domain.turn import TurnController
from hexwizards.utils.rng import create_rng, generate_seed

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hexwizards", description="Hex Wizards tools")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the Hex Wizards API server")
    serve.add_argument("--host", default="127.0.0.1", help="Host interface to bind")
    serve.add_argument("--port", type=int, default=8000, help="TCP port to listen on")
    serve.add_argument(
        "--reload",
        action="store_true",
        help="Enable autoreload (dev mode)",
    )

    simulate = subparsers.add_parser("simulate", help="Play an AI-only game and print a summary")
    simulate.add_argument("--turns", type=int, default=20, help="Player turns to run")
    simulate.add_argument("--seed", default=None, help="Seed string for the game")
    simulate.add_argument("--players", type=int, default=None, help="Number of AI players")
    return parser


@dataclass(slots=True)
class Simulation:
    """A finished headless game and the number of events it published, by type."""

    controller: TurnController
    event_counts: Counter[str] = field(default_factory=Counter)

    def record(self, event: GameEvent) -> None:
        self.event_counts[type(event).__name__] += 1


def run_simulation(
    settings: Settings, *, turns: int, seed: str | None = None, players: int | None = None
) -> Simulation:
    """Play ``turns`` player turns with AI players only."""

    if turns < 1:
        raise ValueError(f"turns must be at least 1, got {turns}")

    seed = seed or settings.seed or generate_seed(0, "simulation")
    rng = create_rng(seed)
    spec = MapSpecification(
        width=settings.board_width,
        height=settings.board_height,
        num_continents=settings.num_continents,
        min_continent_width=settings.min_continent_width,
        max_continent_width=settings.max_continent_width,
    )
    bus = EventBus()
    controller = build_controller(
        spec,
        num_players=players or settings.num_players,
        rng=rng,
        human_players=0,
        rules=RulesConfig(turns=TurnRules(max_automatic_turns=turns)),
        policy=RandomPolicy(rng),
        bus=bus,
    )
    # the bus history is capped, so totals are counted as events arrive
    simulation = Simulation(controller)
    bus.subscribe(GameEvent, simulation.record)
    logger.info("simulating %d turns with seed %r", turns, seed)
    controller.start()
    return simulation


def _print_summary(simulation: Simulation) -> None:
    game = simulation.controller.game
    print(f"turns played: {game.turn_number}")
    for name, count in sorted(simulation.event_counts.items()):
        print(f"  {name}: {count}")
    for player_id in game.turn_order:
        player = game.players[player_id]
        met = sorted(int(other) for other in player.met if other != player.id)
        print(
            f"{player.name} ({player.color}): {len(player.token_ids)} pieces, "
            f"{len(player.discovered)} hexes discovered, met {met or 'nobody'}"
        )


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "simulate":
        simulation = run_simulation(
            settings, turns=args.turns, seed=args.seed, players=args.players
        )
        _print_summary(simulation)
        return

    if args.reload:
        uvicorn.run(
            "hexwizards.api.app:app",
            host=args.host,
            port=args.port,
            reload=True,
            factory=False,
        )
    else:
        from hexwizards.api.app import app

        uvicorn.run(app, host=args.host, port=args.port, reload=False, factory=False)


if __name__ == "__main__":
    main()
