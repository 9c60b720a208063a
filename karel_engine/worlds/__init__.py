"""
Karel's world: the grid, its walls and beepers, and the agent.

- grid:     the mutable World model, directions and ASCII rendering
- legality: which cell edges are blocked (boundary + symmetric walls)
- codec:    world-file parsing/serialization and the goal predicate
"""

from karel_engine.worlds.grid import (
    UNBOUNDED,
    Agent,
    Direction,
    Wall,
    World,
    clone,
)
from karel_engine.worlds.legality import is_blocked
from karel_engine.worlds.codec import format_world, goal_reached, parse_world

__all__ = [
    "UNBOUNDED",
    "Agent",
    "Direction",
    "Wall",
    "World",
    "clone",
    "is_blocked",
    "format_world",
    "goal_reached",
    "parse_world",
]
