"""Command line entry point for running simulations."""

import argparse
import logging
import sys
from decimal import Decimal

from bjtrainer.config import GameSettings
from bjtrainer.schemas import SimulationSummary
from bjtrainer.simulation import (
    BET_SPREAD_PRESETS,
    BETTING_SYSTEMS,
    PLAY_STRATEGIES,
    SimulationConfig,
    create_simulation,
    run_simulation_chunk,
)

logger = logging.getLogger(__name__)

RULE_PRESETS = {
    "default": GameSettings,
    "vegas-strip": GameSettings.vegas_strip,
    "downtown-vegas": GameSettings.downtown_vegas,
    "single-deck": GameSettings.single_deck,
    "atlantic-city": GameSettings.atlantic_city,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bjtrainer-sim", description="Simulate a blackjack play and betting system"
    )
    parser.add_argument("--play", choices=sorted(PLAY_STRATEGIES), default="basic")
    parser.add_argument("--bet-system", choices=sorted(BETTING_SYSTEMS), default="flat")
    parser.add_argument("--bet", type=int, default=10, help="Base bet unit")
    parser.add_argument("--hands", type=int, default=10000, help="Rounds to simulate")
    parser.add_argument("--spread", choices=sorted(BET_SPREAD_PRESETS), default="aggressive")
    parser.add_argument("--wong-threshold", type=float, default=1.0)
    parser.add_argument("--kelly-fraction", type=float, default=0.5)
    parser.add_argument("--rules", choices=sorted(RULE_PRESETS), default="default")
    parser.add_argument("--decks", type=int, default=None, help="Override the number of decks")
    parser.add_argument("--bankroll", type=str, default=None, help="Override the starting bankroll")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--chunk-size", type=int, default=500)
    parser.add_argument("--no-history", action="store_true", help="Omit the bankroll history")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log at DEBUG level")
    return parser


def build_config(args: argparse.Namespace) -> SimulationConfig:
    settings = RULE_PRESETS[args.rules]()
    overrides = {}
    if args.decks is not None:
        overrides["number_of_decks"] = args.decks
    if args.bankroll is not None:
        overrides["starting_bankroll"] = Decimal(args.bankroll)
    if overrides:
        settings = settings.with_overrides(**overrides)

    return SimulationConfig(
        play_strategy=args.play,
        bet_system=args.bet_system,
        bet_amount=args.bet,
        number_of_hands=args.hands,
        bet_spread=BET_SPREAD_PRESETS[args.spread].spread,
        wong_threshold=args.wong_threshold,
        kelly_fraction=args.kelly_fraction,
        settings=settings,
        seed=args.seed,
        chunk_size=args.chunk_size,
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = build_config(args)
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    state = create_simulation(config)
    while not state.done:
        run_simulation_chunk(state)
        logger.debug(
            "Progress: %d/%d rounds, bankroll %s",
            state.progress.hands_completed,
            state.progress.total_hands,
            state.progress.current_bankroll,
        )

    summary = SimulationSummary.from_state(state, include_history=not args.no_history)
    print(summary.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
