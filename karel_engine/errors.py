"""
Errors raised while running a Karel program.

Every error is terminal for the run that raised it. The engine attaches the
partial execution record to the error before it leaves ``run()``:

    error.trace       trace entries appended before the failure
    error.world       snapshot of the world at the failure point
    error.steps_used  statement lines visited so far

so a caller can replay a failed program up to the point of failure without
running it a second time.
"""

from __future__ import annotations

from typing import List, Optional

from karel_engine.worlds.grid import Direction


class KarelError(Exception):
    """Base class for all interpreter and world errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.trace: List = []
        self.world = None
        self.steps_used: int = 0


class NoEntryPoint(KarelError):
    """The program does not define the entry-point procedure."""

    def __init__(self, entry_point: str = "main"):
        super().__init__(
            f"{entry_point}() not found! Define the program with "
            f"def {entry_point}():"
        )
        self.entry_point = entry_point


class UnknownCommand(KarelError):
    """A bare call names neither a primitive nor a user procedure."""

    def __init__(self, name: str):
        super().__init__(f"Unknown command: {name}()")
        self.name = name


class UnknownCondition(KarelError):
    """A while/if header uses a condition outside the vocabulary."""

    def __init__(self, condition: str):
        super().__init__(f"Unknown condition: {condition}")
        self.condition = condition


class MovementBlocked(KarelError):
    """move() was called while the front of the agent was blocked."""

    def __init__(self, x: int, y: int, facing: Direction):
        super().__init__(
            f"Karel is blocked! Position: ({x}, {y}), facing {facing.label}. "
            f"Karel cannot move forward because the way is blocked."
        )
        self.x = x
        self.y = y
        self.facing = facing


class NoBeeperHere(KarelError):
    """pick_beeper() was called on a cell without beepers."""

    def __init__(self, x: int, y: int):
        super().__init__(
            f"Karel cannot pick a beeper at ({x}, {y}) - there is no beeper!"
        )
        self.x = x
        self.y = y


class BagEmpty(KarelError):
    """put_beeper() was called with an empty beeper bag."""

    def __init__(self):
        super().__init__("Karel has no beepers in the bag!")


class StepLimitExceeded(KarelError):
    """The program visited more statement lines than the configured ceiling."""

    def __init__(self, limit: int, procedure: Optional[str] = None):
        super().__init__(
            f"The program exceeded the maximum number of steps ({limit}). "
            f"Is there an infinite loop?"
        )
        self.limit = limit
        self.procedure = procedure


class CallDepthExceeded(StepLimitExceeded):
    """User procedures nested deeper than the interpreter stack allows."""

    def __init__(self, limit: int, procedure: Optional[str] = None):
        super().__init__(limit, procedure)
        self.message = (
            f"Procedure calls nested {limit} levels deep ran out of stack"
            + (f" (in {procedure}())" if procedure else "")
            + ". Is there an endless recursion?"
        )
        self.args = (self.message,)
