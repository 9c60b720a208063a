"""
Karel Engine: an interpreter and grid-world simulator for Karel the Robot.

A learner writes a small Python-flavored program that drives Karel around a
grid of walls and beepers. The engine parses the program into indentation
blocks, runs it against a world, records a snapshot after every action for
playback, and checks the result against a goal world.
"""

from karel_engine.errors import (
    BagEmpty,
    CallDepthExceeded,
    KarelError,
    MovementBlocked,
    NoBeeperHere,
    NoEntryPoint,
    StepLimitExceeded,
    UnknownCommand,
    UnknownCondition,
)
from karel_engine.worlds import (
    UNBOUNDED,
    Agent,
    Direction,
    Wall,
    World,
    clone,
    format_world,
    goal_reached,
    is_blocked,
    parse_world,
)
from karel_engine.engine import EngineConfig, RunResult, TraceEntry, run
from karel_engine.grader import Assessment, Outcome, check_solution
from karel_engine.lint import Diagnostic, Severity, check_syntax

__version__ = "0.1.0"
__all__ = [
    "BagEmpty",
    "CallDepthExceeded",
    "KarelError",
    "MovementBlocked",
    "NoBeeperHere",
    "NoEntryPoint",
    "StepLimitExceeded",
    "UnknownCommand",
    "UnknownCondition",
    "UNBOUNDED",
    "Agent",
    "Direction",
    "Wall",
    "World",
    "clone",
    "format_world",
    "goal_reached",
    "is_blocked",
    "parse_world",
    "EngineConfig",
    "RunResult",
    "TraceEntry",
    "run",
    "Assessment",
    "Outcome",
    "check_solution",
    "Diagnostic",
    "Severity",
    "check_syntax",
]
