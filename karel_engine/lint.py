"""
Lightweight syntax checks for Karel programs.

These run without executing anything and catch the mistakes beginners make
most often before they press "run":

- no ``def main():``
- unbalanced parentheses
- a built-in command or condition written without ``()``
- a block header (def/if/while/elif/else) followed by an unindented line

The checker is advisory. It never raises, and a program it complains about
may still run (the interpreter is far more lenient).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

_MAIN_HEADER = re.compile(r"def\s+main\s*\(\s*\)\s*:")
_BLOCK_HEADER = re.compile(r"^(def|if|while|else|elif)\b.*:")

# Names beginners most often forget to call.
CALLABLE_NAMES = (
    "move",
    "turn_left",
    "pick_beeper",
    "put_beeper",
    "front_is_clear",
    "left_is_clear",
    "right_is_clear",
    "beepers_present",
    "beepers_in_bag",
)

_BARE_NAME = {
    name: re.compile(rf"\b{name}\b(?!\s*\()") for name in CALLABLE_NAMES
}


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """One problem found in a program. ``line`` is 1-based, or None."""
    line: Optional[int]
    message: str
    severity: Severity

    def __str__(self) -> str:
        where = f"line {self.line}" if self.line is not None else "program"
        return f"{where}: {self.severity.value}: {self.message}"


def check_syntax(script: str) -> List[Diagnostic]:
    """Return every diagnostic for ``script``, in source order."""
    diagnostics: List[Diagnostic] = []
    lines = script.split("\n")

    if script.strip() and not _MAIN_HEADER.search(script):
        diagnostics.append(Diagnostic(
            1, "def main(): is not defined", Severity.ERROR,
        ))

    if script.count("(") != script.count(")"):
        diagnostics.append(Diagnostic(
            None, "Parentheses are not balanced", Severity.ERROR,
        ))

    for idx, line in enumerate(lines):
        stripped = line.strip()
        if stripped.startswith("#"):
            continue

        for name, pattern in _BARE_NAME.items():
            if pattern.search(stripped):
                diagnostics.append(Diagnostic(
                    idx + 1,
                    f"{name} must be called with parentheses: {name}()",
                    Severity.WARNING,
                ))

        if _BLOCK_HEADER.match(stripped) and idx + 1 < len(lines):
            following = lines[idx + 1]
            if following.strip() and not following.startswith((" ", "\t")):
                diagnostics.append(Diagnostic(
                    idx + 2, "Expected an indented block", Severity.ERROR,
                ))

    return diagnostics


def has_errors(diagnostics: List[Diagnostic]) -> bool:
    return any(d.severity is Severity.ERROR for d in diagnostics)
