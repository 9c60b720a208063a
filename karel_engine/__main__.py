"""
Command-line runner.

    python -m karel_engine program.py world.w [--goal goal.w] [--verbose]

Prints the executed actions, optionally the final world, and, when a goal
world is given, whether the program solved it.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from karel_engine.engine import EngineConfig, TraceEntry
from karel_engine.grader import Outcome, check_solution
from karel_engine.lint import check_syntax
from karel_engine.worlds.codec import parse_world


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="karel_engine",
        description="Run a Karel program against a world file",
    )
    parser.add_argument("program", type=Path, help="Karel program source")
    parser.add_argument("world", type=Path, help="initial world file")
    parser.add_argument("--goal", type=Path, default=None,
                        help="goal world file to grade against")
    parser.add_argument("--max-steps", type=int, default=EngineConfig.max_steps,
                        help="statement lines to run before giving up")
    parser.add_argument("--show-world", action="store_true",
                        help="print the final world as ASCII")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="enable debug logging")
    return parser


def format_entry(index: int, entry: TraceEntry) -> str:
    agent = entry.world.agent
    return f"  #{index:<4d} {entry.action}() → ({agent.x}, {agent.y}) {agent.facing.label}"


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format="%(levelname)s %(name)s: %(message)s")

    script = args.program.read_text(encoding="utf-8")
    world = parse_world(args.world.read_text(encoding="utf-8"))
    # Without a goal, grade against the start so only errors matter.
    goal = parse_world(args.goal.read_text(encoding="utf-8")) if args.goal else world

    for diagnostic in check_syntax(script):
        print(diagnostic)

    assessment = check_solution(
        script, world, goal, config=EngineConfig(max_steps=args.max_steps),
    )

    for index, entry in enumerate(assessment.trace, start=1):
        print(format_entry(index, entry))

    if args.show_world:
        print()
        print(assessment.final_world.render())

    if assessment.outcome is Outcome.FAILED:
        print()
        print(f"Error: {assessment.error.message}")
        return 1

    if args.goal:
        print()
        print(assessment.summary())
        return 0 if assessment.solved else 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
