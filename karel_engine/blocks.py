"""
Indentation block scanner for Karel programs.

Karel programs are not tokenized or turned into a syntax tree. A block is
just the run of source lines that belongs to a header (``def``, ``while``,
``if``), found by indentation alone:

1. The indentation of the first non-blank line sets the block's baseline.
2. The block continues until a non-blank line indented strictly less than
   the baseline, or the end of the input.
3. Blank lines always belong to the block and never set the baseline.

The same scan is used for procedure bodies and, recursively, for loop and
branch bodies; it reports how many lines it consumed so the caller can step
past a nested block.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List

_DEF_HEADER = re.compile(r"def\s+(\w+)\s*\(\s*\)\s*:")
_LEADING_WS = re.compile(r"^\s*")

# Lines starting with these are comments or docstring delimiters.
_SKIP_PREFIXES = ("#", '"""', "'''")


@dataclass
class Block:
    """Lines of one block plus how many source lines it spanned."""
    lines: List[str]
    consumed: int

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


def indent_width(line: str) -> int:
    return len(_LEADING_WS.match(line).group())


def is_skippable(stripped: str) -> bool:
    """Blank, comment and docstring-delimiter lines are not statements."""
    return not stripped or stripped.startswith(_SKIP_PREFIXES)


def extract_block_lines(lines: List[str], start: int) -> Block:
    """Scan ``lines[start:]`` for the block that begins there."""
    block: List[str] = []
    baseline = None

    for line in lines[start:]:
        if line.strip() == "":
            block.append("")
            continue

        indent = indent_width(line)
        if baseline is None:
            baseline = indent
        if indent < baseline:
            break

        block.append(line)

    return Block(lines=block, consumed=len(block))


def extract_block(text: str, offset: int = 0) -> str:
    """Block of raw text starting at character ``offset``."""
    return extract_block_lines(text[offset:].split("\n"), 0).text


def find_procedures(script: str) -> Dict[str, str]:
    """
    Map every ``def name():`` in the script to its body text.

    A later definition with the same name replaces an earlier one.
    """
    procedures: Dict[str, str] = {}
    for match in _DEF_HEADER.finditer(script):
        procedures[match.group(1)] = extract_block(script, match.end())
    return procedures
