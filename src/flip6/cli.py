# Area: Shared
"""
flip6.cli — Command-line interface
==================================

Usage:
    flip6 init-db --db flip6.db                 # Create the SQLite schema
    flip6 catalog                               # Print the card catalog
    flip6 simulate --players 3 --rounds 2 --seed 7
    flip6 --config engine.json simulate --db game.db

Settings come from ``--config``, ``.env`` and FLIP6_* environment
variables (see ``flip6.config``).
"""

import argparse
import random
import sys
from dataclasses import replace
from typing import Any, Dict, List, Optional

from ._deck.catalog import card_meta, card_number, default_counts
from ._engine.enums import ActionType
from ._shared.logging_config import setup_logging
from ._store.database import init_database
from .config import EngineConfig, load_config
from .engine import GameEngine
from .errors import ConfigError

# Bot stays once its numbers reach this total
STAY_THRESHOLD = 20
MAX_STEPS_PER_ROUND = 500


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="flip6",
        description="Flip 6 session engine tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  flip6 init-db --db flip6.db
  flip6 catalog
  flip6 simulate --players 4 --rounds 3 --seed 42
        """,
    )
    parser.add_argument("--config", type=str, help="Path to JSON config file")
    parser.add_argument("--log-level", type=str, help="Override the log level")

    sub = parser.add_subparsers(dest="command", required=True)

    init_db = sub.add_parser("init-db", help="Create the SQLite schema")
    init_db.add_argument("--db", type=str, required=True, help="SQLite file path")

    sub.add_parser("catalog", help="Print card values, assets and counts")

    simulate = sub.add_parser("simulate", help="Play a seeded game with bots")
    simulate.add_argument("--players", type=int, default=3)
    simulate.add_argument("--rounds", type=int, default=3)
    simulate.add_argument("--seed", type=int, default=None)
    simulate.add_argument("--db", type=str, default=None, help="Persist to SQLite")
    simulate.add_argument("--code", type=str, default="SIM1")

    return parser.parse_args(argv)


def print_catalog(counts: Optional[Dict[str, int]] = None) -> None:
    counts = counts if counts is not None else default_counts()
    total = 0
    for row in card_meta():
        count = counts.get(row["value"], 0)
        print(f"{row['value']:>13}  x{count:<3} {row['filename']}")
        total += count
    print(f"{'total':>13}  {total}")


# ── Simulation ───────────────────────────────────────────────

def _in_round(snapshot: Dict[str, Any]) -> List[int]:
    return [
        p["playerId"] for p in snapshot["players"]
        if p["active"] and not p["stayed"] and not p["busted"]
    ]


def _hand_total(snapshot: Dict[str, Any], player_id: int) -> int:
    return sum(
        card_number(h["cardValue"]) or 0
        for h in snapshot["hands"] if h["playerId"] == player_id
    )


def _bot_step(engine: GameEngine, code: str, snapshot: Dict[str, Any], rng: random.Random) -> bool:
    """Take one bot decision for whoever must act. Returns False if stuck."""
    pending = snapshot["pendingAction"]
    if pending is not None:
        actor = pending["actorId"]
        action = ActionType(pending["type"])
        if action is ActionType.SECOND_CHANCE:
            return engine.resolve_action(code, actor, action, accept=True).applied
        others = [pid for pid in _in_round(snapshot) if pid != actor]
        target = rng.choice(others) if others else actor
        return engine.resolve_action(code, actor, action, target_id=target).applied

    current = snapshot["currentTurn"]
    if current is None:
        return False
    if _hand_total(snapshot, current) >= STAY_THRESHOLD:
        return engine.stay(code, current).applied
    if engine.draw(code, current).applied:
        return True
    return engine.stay(code, current).applied


def simulate(
    players: int, rounds: int, seed: Optional[int], db_path: Optional[str] = None,
    code: str = "SIM1", config: Optional[EngineConfig] = None,
) -> GameEngine:
    """Play ``rounds`` rounds with ``players`` bots and print each round's scores."""
    config = config or EngineConfig()
    config = replace(
        config,
        db_path=db_path or config.db_path,
        seed=seed if seed is not None else config.seed,
    )
    engine = GameEngine(config)
    rng = random.Random(seed)

    names = {}
    for i in range(players):
        result = engine.join(code, f"Bot{i + 1}", connection_id=f"bot-{i + 1}")
        names[result.player_id] = f"Bot{i + 1}"

    for _ in range(rounds):
        snapshot = engine.get_snapshot(code)
        round_number = snapshot["roundNumber"]
        for _ in range(MAX_STEPS_PER_ROUND):
            snapshot = engine.get_snapshot(code)
            if snapshot["roundOver"] or not _bot_step(engine, code, snapshot, rng):
                break

        snapshot = engine.get_snapshot(code)
        if not snapshot["roundOver"]:
            print(f"Round {round_number} did not finish", file=sys.stderr)
            break
        starter = snapshot["players"][0]["playerId"]
        engine.end_round(code, starter)
        scores = engine.round_history(code, round_number)
        line = ", ".join(f"{names[s.player_id]}={s.score}" for s in scores)
        print(f"Round {round_number}: {line}")

    final = engine.get_snapshot(code)
    totals = ", ".join(f"{p['name']}={p['totalScore']}" for p in final["players"])
    print(f"Totals: {totals}")
    return engine


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)
    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    setup_logging(config.log_file, args.log_level or config.log_level)

    if args.command == "init-db":
        init_database(args.db)
        print(f"Database initialized at {args.db}")
    elif args.command == "catalog":
        print_catalog(config.catalog)
    elif args.command == "simulate":
        if args.players < 1 or args.rounds < 1:
            print("Error: --players and --rounds must be at least 1", file=sys.stderr)
            return 1
        simulate(args.players, args.rounds, args.seed, args.db, args.code, config)
    return 0
