"""
Karel's grid world: streets, avenues, walls and beepers.

A world is a rectangle of ``width`` x ``height`` cells addressed with
1-indexed ``(x, y)`` coordinates, where ``x`` grows eastward and ``y`` grows
northward. It holds:

- Walls: obstructions attached to one edge of a cell. A wall recorded on one
  side of an edge also blocks the neighbour across it (see ``legality``).
- Beepers: countable markers stacked on cells.
- Karel: the agent, with a position and a facing.
- The beeper bag: how many beepers Karel carries (possibly unbounded).

The world is plain mutable data. The commands in ``karel_engine.commands``
are the only code that mutates it during a run, and every snapshot handed out
by the engine is an independent deep copy.
"""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional, Set, Tuple, Union

import numpy as np


# Sentinel bag size for "infinity" in world files.
UNBOUNDED = math.inf

BagSize = Union[int, float]


# ---------------------------------------------------------------------------
# Directions
# ---------------------------------------------------------------------------

class Direction(IntEnum):
    """The four compass directions Karel can face."""
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    def delta(self) -> Tuple[int, int]:
        """x, y displacement of one step in this direction."""
        return _DELTAS[self]

    def turn_left(self) -> "Direction":
        return _TURN_LEFT[self]

    def turn_right(self) -> "Direction":
        # Three left turns, never a separate table.
        return self.turn_left().turn_left().turn_left()

    def opposite(self) -> "Direction":
        return self.turn_left().turn_left()

    @property
    def label(self) -> str:
        """Lowercase name as written in world files."""
        return self.name.lower()

    @staticmethod
    def from_name(name: str) -> Optional["Direction"]:
        """Case-insensitive lookup; None for anything unrecognized."""
        return _BY_LABEL.get(name.strip().lower())

    @staticmethod
    def all() -> List["Direction"]:
        return [Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST]


_DELTAS = {
    Direction.NORTH: (0, 1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, -1),
    Direction.WEST: (-1, 0),
}

_TURN_LEFT = {
    Direction.NORTH: Direction.WEST,
    Direction.WEST: Direction.SOUTH,
    Direction.SOUTH: Direction.EAST,
    Direction.EAST: Direction.NORTH,
}

_BY_LABEL = {d.name.lower(): d for d in Direction}


# ---------------------------------------------------------------------------
# World contents
# ---------------------------------------------------------------------------

@dataclass(frozen=True, order=True)
class Wall:
    """A wall on the ``direction`` edge of cell (x, y)."""
    x: int
    y: int
    direction: Direction


@dataclass
class Agent:
    """Karel's pose."""
    x: int = 1
    y: int = 1
    facing: Direction = Direction.EAST

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def __repr__(self) -> str:
        return f"Agent(({self.x}, {self.y}), {self.facing.label})"


@dataclass
class World:
    """
    The mutable state of one Karel world.

    ``beepers`` only ever holds positive counts: removing the last beeper on
    a cell deletes its entry, so an absent coordinate and a zero count can
    never disagree.
    """
    width: int = 1
    height: int = 1
    walls: Set[Wall] = field(default_factory=set)
    beepers: Dict[Tuple[int, int], int] = field(default_factory=dict)
    agent: Agent = field(default_factory=Agent)
    bag: BagSize = 0

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(
                f"World dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.bag < 0:
            raise ValueError(f"Beeper bag cannot be negative, got {self.bag}")
        self.beepers = {pos: n for pos, n in self.beepers.items() if n > 0}

    @property
    def dimensions(self) -> Tuple[int, int]:
        return (self.width, self.height)

    @property
    def has_unbounded_bag(self) -> bool:
        return math.isinf(self.bag)

    def in_bounds(self, x: int, y: int) -> bool:
        return 1 <= x <= self.width and 1 <= y <= self.height

    # --- beepers ---------------------------------------------------------

    def beepers_at(self, x: int, y: int) -> int:
        return self.beepers.get((x, y), 0)

    def add_beeper(self, x: int, y: int) -> None:
        self.beepers[(x, y)] = self.beepers.get((x, y), 0) + 1

    def remove_beeper(self, x: int, y: int) -> None:
        """Take one beeper off (x, y). The caller checks one is there."""
        remaining = self.beepers.get((x, y), 0) - 1
        if remaining > 0:
            self.beepers[(x, y)] = remaining
        else:
            self.beepers.pop((x, y), None)

    # --- snapshots -------------------------------------------------------

    def copy(self) -> "World":
        """Deep copy sharing no mutable state with this world."""
        return World(
            width=self.width,
            height=self.height,
            walls=set(self.walls),
            beepers=dict(self.beepers),
            agent=copy.copy(self.agent),
            bag=self.bag,
        )

    def beeper_grid(self) -> np.ndarray:
        """
        Beeper counts as a (height, width) array.

        Row 0 is the northernmost street so the array prints the same way
        the world is drawn. Beepers outside the dimensions are dropped.
        """
        grid = np.zeros((self.height, self.width), dtype=int)
        for (x, y), count in self.beepers.items():
            if self.in_bounds(x, y):
                grid[self.height - y, x - 1] = count
        return grid

    def render(self) -> str:
        """ASCII rendering of the world for debugging."""
        arrows = {
            Direction.NORTH: "^",
            Direction.EAST: ">",
            Direction.SOUTH: "v",
            Direction.WEST: "<",
        }
        grid = self.beeper_grid()
        lines = []
        for row in range(self.height):
            y = self.height - row
            cells = []
            for col in range(self.width):
                x = col + 1
                if (x, y) == self.agent.position:
                    cells.append(arrows[self.agent.facing])
                elif grid[row, col] > 9:
                    cells.append("*")
                elif grid[row, col] > 0:
                    cells.append(str(grid[row, col]))
                else:
                    cells.append(".")
            lines.append(" ".join(cells))
        bag = "infinity" if self.has_unbounded_bag else str(int(self.bag))
        lines.append(f"bag: {bag}  walls: {len(self.walls)}")
        return "\n".join(lines)


def clone(world: World) -> World:
    """Deep copy of ``world``; the form handed to observers and traces."""
    return world.copy()
