"""
World file codec and goal comparison.

World files are line oriented, one declaration per line, keywords
case-insensitive:

    Dimension: (7, 5)
    Wall: (3, 2); west
    Beeper: (6, 3); 1
    Karel: (3, 4); east
    BeeperBag: infinity

Parsing is lenient on purpose: lines that are blank, unrecognized
(``Speed: 0.00``) or malformed are skipped without complaint, and anything
not declared keeps its default (1x1 world, Karel at (1, 1) facing east, no
walls, no beepers, empty bag).
"""

from __future__ import annotations

import re
from typing import Dict, Optional, Tuple

from karel_engine.worlds.grid import UNBOUNDED, Agent, BagSize, Direction, Wall, World


_PAIR = re.compile(r"\((\d+),\s*(\d+)\)")
_PAIR_AND_WORD = re.compile(r"\((\d+),\s*(\d+)\);\s*(\w+)")
_PAIR_AND_COUNT = re.compile(r"\((\d+),\s*(\d+)\);\s*(\d+)")
_LEADING_INT = re.compile(r"\d+")

_INFINITE_BAG = ("infinity", "infinite")


def _split_declaration(line: str) -> Optional[Tuple[str, str]]:
    """'Wall: (1, 2); north' -> ('wall', '(1, 2); north')."""
    stripped = line.strip()
    if not stripped or ":" not in stripped:
        return None
    keyword, _, params = stripped.partition(":")
    return keyword.strip().lower(), params.strip().lower()


def _parse_bag(params: str) -> BagSize:
    if params in _INFINITE_BAG:
        return UNBOUNDED
    match = _LEADING_INT.match(params)
    return int(match.group()) if match else 0


def parse_world(text: str) -> World:
    """Build a World from world-file text. Never raises on bad lines."""
    width, height = 1, 1
    walls = set()
    beepers: Dict[Tuple[int, int], int] = {}
    agent = Agent()
    bag: BagSize = 0

    for line in text.splitlines():
        declaration = _split_declaration(line)
        if declaration is None:
            continue
        keyword, params = declaration

        if keyword == "dimension":
            match = _PAIR.search(params)
            if match and int(match.group(1)) > 0 and int(match.group(2)) > 0:
                width, height = int(match.group(1)), int(match.group(2))

        elif keyword == "wall":
            match = _PAIR_AND_WORD.search(params)
            if match:
                direction = Direction.from_name(match.group(3))
                if direction is not None:
                    walls.add(Wall(int(match.group(1)), int(match.group(2)), direction))

        elif keyword == "beeper":
            match = _PAIR_AND_COUNT.search(params)
            if match:
                pos = (int(match.group(1)), int(match.group(2)))
                count = int(match.group(3))
                if count > 0:
                    beepers[pos] = count
                else:
                    beepers.pop(pos, None)

        elif keyword == "karel":
            match = _PAIR_AND_WORD.search(params)
            if match:
                facing = Direction.from_name(match.group(3))
                if facing is not None:
                    agent = Agent(int(match.group(1)), int(match.group(2)), facing)

        elif keyword == "beeperbag":
            bag = _parse_bag(params)

    return World(
        width=width,
        height=height,
        walls=walls,
        beepers=beepers,
        agent=agent,
        bag=bag,
    )


def format_world(world: World) -> str:
    """Serialize a World back into world-file text."""
    lines = [f"Dimension: ({world.width}, {world.height})"]
    for wall in sorted(world.walls):
        lines.append(f"Wall: ({wall.x}, {wall.y}); {wall.direction.label}")
    for (x, y), count in sorted(world.beepers.items()):
        lines.append(f"Beeper: ({x}, {y}); {count}")
    agent = world.agent
    lines.append(f"Karel: ({agent.x}, {agent.y}); {agent.facing.label}")
    bag = "infinity" if world.has_unbounded_bag else str(int(world.bag))
    lines.append(f"BeeperBag: {bag}")
    return "\n".join(lines) + "\n"


def goal_reached(actual: World, goal: World) -> bool:
    """
    Does ``actual`` satisfy ``goal``?

    Only Karel's pose and the beeper layout count. Walls and the bag level
    are ignored, so a goal file need not repeat the walls or know how many
    beepers Karel ended up carrying.
    """
    if (actual.agent.x, actual.agent.y, actual.agent.facing) != (
        goal.agent.x, goal.agent.y, goal.agent.facing
    ):
        return False

    ours = {pos: n for pos, n in actual.beepers.items() if n > 0}
    theirs = {pos: n for pos, n in goal.beepers.items() if n > 0}
    return ours == theirs
