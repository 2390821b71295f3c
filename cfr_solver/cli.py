"""Command-line entry point: train a reference game and print the report.

    cfr-solver --game kuhn --trainer cfr --iterations 2000 --simulate 10000
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from cfr_solver.analysis.simulator import simulate_games
from cfr_solver.analysis.strategy_report import print_strategy_table, print_training_summary
from cfr_solver.config import SolverConfig, load_config
from cfr_solver.engine.game import Game
from cfr_solver.engine.kuhn import KuhnPoker
from cfr_solver.engine.matching_pennies import MatchingPennies
from cfr_solver.solvers.mccfr import MCCFRTrainer
from cfr_solver.solvers.trainer import Trainer

GAMES: dict[str, type[Game]] = {
    "kuhn": KuhnPoker,
    "matching-pennies": MatchingPennies,
}

ACTION_LABELS: dict[str, list[str]] = {
    "kuhn": ["PASS", "BET"],
    "matching-pennies": ["HEADS", "TAILS"],
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Train CFR+ / MCCFR strategies for a reference game")
    parser.add_argument("--game", choices=sorted(GAMES), default="kuhn", help="Game to solve")
    parser.add_argument("--trainer", choices=["cfr", "mccfr"], default="cfr", help="Traversal policy")
    parser.add_argument("--iterations", type=int, default=1000, help="Self-play iterations")
    parser.add_argument("--sample-rate", type=float, default=None, help="MCCFR action sample rate (only with --trainer mccfr)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--config", type=str, default=None, help="YAML solver config")
    parser.add_argument("--simulate", type=int, default=0, help="Playout games after training (0 to skip)")
    parser.add_argument("--limit", type=int, default=20, help="Rows in the strategy table")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.sample_rate is not None and args.trainer != "mccfr":
        parser.error("--sample-rate requires --trainer mccfr")
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config) if args.config else SolverConfig()
    if args.seed is not None:
        config.seed = args.seed

    game = GAMES[args.game]()
    if args.trainer == "mccfr":
        trainer: Trainer = MCCFRTrainer(game, args.sample_rate, config)
    else:
        trainer = Trainer(game, config)

    roots = [game.initial_state()]
    summary = trainer.run(roots, args.iterations)

    print_training_summary(summary)
    print_strategy_table(trainer, limit=args.limit, action_labels=ACTION_LABELS[args.game])

    if args.simulate > 0:
        result = simulate_games(game, trainer, roots, args.simulate, seed=config.seed)
        print(result)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
