"""
Legality oracle: is the edge of a cell blocked?

Two sources of obstruction:

1. The world boundary. Leaving the grid is always blocked, whatever walls
   are recorded.
2. Recorded walls. A wall belongs to one cell edge but blocks both sides of
   it, so a query checks the wall on this cell *and* the wall on the
   neighbouring cell tagged with the opposite direction.
"""

from __future__ import annotations

from karel_engine.worlds.grid import Direction, Wall, World


def at_boundary(world: World, x: int, y: int, direction: Direction) -> bool:
    """True if stepping from (x, y) toward ``direction`` leaves the grid."""
    if direction == Direction.NORTH:
        return y >= world.height
    if direction == Direction.SOUTH:
        return y <= 1
    if direction == Direction.EAST:
        return x >= world.width
    return x <= 1


def is_blocked(world: World, x: int, y: int, direction: Direction) -> bool:
    """
    Can Karel *not* cross the ``direction`` edge of cell (x, y)?

    A wall recorded as (x, y, NORTH) and one recorded as (x, y + 1, SOUTH)
    describe the same edge; either blocks traversal from both cells.
    """
    if at_boundary(world, x, y, direction):
        return True

    if Wall(x, y, direction) in world.walls:
        return True

    dx, dy = direction.delta()
    return Wall(x + dx, y + dy, direction.opposite()) in world.walls


def front_direction(world: World) -> Direction:
    return world.agent.facing


def left_direction(world: World) -> Direction:
    return world.agent.facing.turn_left()


def right_direction(world: World) -> Direction:
    return world.agent.facing.turn_right()


def agent_blocked(world: World, direction: Direction) -> bool:
    """is_blocked() evaluated at Karel's current cell."""
    return is_blocked(world, world.agent.x, world.agent.y, direction)
