"""
Grader: run a program and decide whether it solved the assignment.

``check_solution`` is the one call a front end needs for a "run" button. It
runs the program once, compares the final world with the goal, and returns
everything needed to replay and explain the result, including the partial
trace of a run that failed part way.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from karel_engine.engine import EngineConfig, StepObserver, TraceEntry, run
from karel_engine.errors import KarelError
from karel_engine.worlds.codec import goal_reached, parse_world
from karel_engine.worlds.grid import World


class Outcome(Enum):
    SOLVED = "solved"          # Ran to completion and matched the goal
    INCORRECT = "incorrect"    # Ran to completion, goal not matched
    FAILED = "failed"          # Raised an error before finishing


@dataclass
class Assessment:
    """Result of grading one program against one assignment."""
    outcome: Outcome
    final_world: World
    trace: List[TraceEntry] = field(default_factory=list)
    error: Optional[KarelError] = None
    steps_used: int = 0

    @property
    def solved(self) -> bool:
        return self.outcome is Outcome.SOLVED

    def summary(self) -> str:
        """Human-readable report of the assessment."""
        agent = self.final_world.agent
        lines = [
            "═" * 50,
            "  Karel Assessment",
            "═" * 50,
            f"  Outcome:       {self.outcome.value}",
            f"  Actions run:   {len(self.trace)}",
            f"  Steps used:    {self.steps_used}",
            f"  Final Karel:   ({agent.x}, {agent.y}) {agent.facing.label}",
        ]
        if self.error is not None:
            lines.append(f"  Error:         {type(self.error).__name__}")
            lines.append(f"                 {self.error.message}")
        elif self.outcome is Outcome.INCORRECT:
            lines.append("  The final world does not match the goal.")
        lines.append("═" * 50)
        return "\n".join(lines)


WorldSource = Union[World, str]


def _as_world(source: WorldSource) -> World:
    return parse_world(source) if isinstance(source, str) else source


def check_solution(script: str, world: WorldSource, goal: WorldSource,
                   config: Optional[EngineConfig] = None,
                   on_step: Optional[StepObserver] = None) -> Assessment:
    """
    Grade ``script`` on ``world`` against ``goal``.

    Worlds may be World objects or world-file text. A KarelError raised by
    the run is reported as FAILED rather than propagated.
    """
    start = _as_world(world)
    target = _as_world(goal)

    try:
        result = run(script, start, on_step=on_step, config=config)
    except KarelError as error:
        return Assessment(
            outcome=Outcome.FAILED,
            final_world=error.world if error.world is not None else start.copy(),
            trace=error.trace,
            error=error,
            steps_used=error.steps_used,
        )

    outcome = Outcome.SOLVED if goal_reached(result.final_world, target) else Outcome.INCORRECT
    return Assessment(
        outcome=outcome,
        final_world=result.final_world,
        trace=result.trace,
        steps_used=result.steps_used,
    )
