"""
Execution engine: runs a Karel program against a world.

The engine walks the program line by line:

    find procedures → run main() → for each line: while / if / call → ...

Every primitive action that succeeds appends a (action, snapshot) entry to
the trace, so the caller can replay the run afterwards. Conditions, control
headers and user procedure calls are not recorded themselves; only the
actions they end up invoking are.

Runaway programs are stopped by a step ceiling: each statement line visited
counts one step, shared across every nested block and procedure call of the
run. It is the only loop-termination safeguard.

Usage:
    world = parse_world(world_text)
    result = run(program_text, world)
    result.final_world, result.trace
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from karel_engine.blocks import (
    extract_block_lines,
    find_procedures,
    indent_width,
    is_skippable,
)
from karel_engine.commands import ACTIONS, evaluate_condition, is_condition
from karel_engine.errors import (
    CallDepthExceeded,
    KarelError,
    NoEntryPoint,
    StepLimitExceeded,
    UnknownCommand,
)
from karel_engine.worlds.grid import World, clone

logger = logging.getLogger(__name__)

_WHILE = re.compile(r"while\s+(.+):")
_IF = re.compile(r"if\s+(.+):")
_ELIF = re.compile(r"elif\s+(.+):")
_ELSE = re.compile(r"else\s*:")
_CALL = re.compile(r"^(\w+)\s*\(\s*\)")

StepObserver = Callable[[World, str], None]


@dataclass
class EngineConfig:
    """Configuration for running a program."""
    max_steps: int = 10000          # Statement lines visited before giving up
    entry_point: str = "main"       # Procedure the run starts from
    noop_commands: Tuple[str, ...] = ("pass", "run_karel_program")


@dataclass(frozen=True)
class TraceEntry:
    """One executed action and the world right after it."""
    action: str
    world: World


@dataclass
class RunResult:
    """Outcome of a run that finished without error."""
    final_world: World
    trace: List[TraceEntry] = field(default_factory=list)
    steps_used: int = 0

    @property
    def actions(self) -> List[str]:
        return [entry.action for entry in self.trace]


class ExecutionContext:
    """
    Mutable state of a single run.

    One context is created per ``run()`` call and handed to every nested
    block, so the step counter, trace and world are shared by the whole run
    and by nothing else.
    """

    def __init__(self, world: World, procedures: Dict[str, List[str]],
                 config: EngineConfig,
                 on_step: Optional[StepObserver] = None):
        self.world = world
        self.procedures = procedures
        self.config = config
        self.on_step = on_step
        self.trace: List[TraceEntry] = []
        self.steps = 0
        self._call_stack: List[str] = []

    # --- statements ------------------------------------------------------

    def run_procedure(self, name: str) -> None:
        self._call_stack.append(name)
        try:
            self.execute_block(self.procedures[name])
        except RecursionError:
            # Nesting outgrew the interpreter's stack before the step ceiling.
            raise CallDepthExceeded(len(self._call_stack), name) from None
        finally:
            self._call_stack.pop()

    def execute_block(self, lines: List[str]) -> None:
        """Interpret one block of raw (still indented) source lines."""
        i = 0
        while i < len(lines):
            line = lines[i].strip()
            if is_skippable(line):
                i += 1
                continue

            self._count_step()

            match = _WHILE.match(line)
            if match:
                body = extract_block_lines(lines, i + 1)
                while evaluate_condition(match.group(1).strip(), self.world):
                    self.execute_block(body.lines)
                i += body.consumed + 1
                continue

            match = _IF.match(line)
            if match:
                i = self._execute_branches(lines, i, match.group(1).strip())
                continue

            match = _CALL.match(line)
            if match:
                self.call(match.group(1))

            i += 1

    def _execute_branches(self, lines: List[str], i: int,
                          condition: Optional[str]) -> int:
        """
        Run an if/elif/else chain starting at header line ``i``.

        Returns the index of the first line after the chain. Only elif/else
        lines at the same indentation as the ``if`` continue the chain.
        """
        header_indent = indent_width(lines[i])
        taken = False

        while True:
            body = extract_block_lines(lines, i + 1)
            if not taken and (condition is None
                              or evaluate_condition(condition, self.world)):
                taken = True
                self.execute_block(body.lines)
            i += body.consumed + 1

            if i >= len(lines) or indent_width(lines[i]) != header_indent:
                return i
            line = lines[i].strip()
            match = _ELIF.match(line)
            if match:
                condition = match.group(1).strip()
            elif _ELSE.match(line):
                condition = None
            else:
                return i
            self._count_step()

    def call(self, name: str) -> None:
        """Execute a bare ``name()`` statement."""
        action = ACTIONS.get(name)
        if action is not None:
            action(self.world)
            self._record(name)
        elif name in self.procedures:
            self.run_procedure(name)
        elif name in self.config.noop_commands or is_condition(name):
            # A condition called as a statement has no effect.
            return
        else:
            raise UnknownCommand(name)

    # --- bookkeeping -----------------------------------------------------

    def _count_step(self) -> None:
        self.steps += 1
        if self.steps > self.config.max_steps:
            current = self._call_stack[-1] if self._call_stack else None
            raise StepLimitExceeded(self.config.max_steps, current)

    def _record(self, action: str) -> None:
        self.trace.append(TraceEntry(action, clone(self.world)))
        if self.on_step is not None:
            self.on_step(clone(self.world), action)


def run(script: str, initial_world: World,
        on_step: Optional[StepObserver] = None,
        config: Optional[EngineConfig] = None) -> RunResult:
    """
    Run a Karel program from its entry point.

    The initial world is never modified; the run works on a copy. On success
    the final world and trace are returned. On failure the KarelError
    propagates with the partial trace, the world at the failure point and
    the steps used attached as ``trace``, ``world`` and ``steps_used``.

    ``on_step(world, action)`` is called right after each successful action
    with its own fresh copy of the world.
    """
    config = config or EngineConfig()
    procedures = {
        name: body.split("\n") for name, body in find_procedures(script).items()
    }
    logger.debug("Found procedures: %s", ", ".join(procedures) or "(none)")

    if config.entry_point not in procedures:
        error = NoEntryPoint(config.entry_point)
        error.world = clone(initial_world)
        raise error

    context = ExecutionContext(clone(initial_world), procedures, config, on_step)
    try:
        context.run_procedure(config.entry_point)
    except KarelError as error:
        error.trace = list(context.trace)
        error.world = clone(context.world)
        error.steps_used = context.steps
        logger.debug("Run failed after %d steps and %d actions: %s",
                     context.steps, len(context.trace), error.message)
        raise

    logger.debug("Run finished: %d steps, %d actions",
                 context.steps, len(context.trace))
    return RunResult(
        final_world=context.world,
        trace=context.trace,
        steps_used=context.steps,
    )
