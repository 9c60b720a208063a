"""
Karel's built-in vocabulary: primitive actions and conditions.

Each entry has:
- A name, as written in a program (``move``, ``front_is_clear``)
- A kind: ACTION mutates the world and may raise, CONDITION only reads it
  and never raises
- A callable taking the World

Programs resolve names against ``OPERATION_REGISTRY`` with a plain dict
lookup; nothing is looked up by reflection.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from karel_engine.errors import BagEmpty, MovementBlocked, NoBeeperHere, UnknownCondition
from karel_engine.worlds.grid import Direction, World
from karel_engine.worlds.legality import (
    agent_blocked,
    front_direction,
    left_direction,
    right_direction,
)


class OperationKind(Enum):
    ACTION = "action"
    CONDITION = "condition"


@dataclass(frozen=True, slots=True)
class Operation:
    """A named primitive Karel operation."""

    name: str
    kind: OperationKind
    func: Callable[[World], Optional[bool]]

    def __call__(self, world: World) -> Optional[bool]:
        return self.func(world)

    def __repr__(self) -> str:
        return f"Operation({self.name}, {self.kind.value})"


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

def _move(world: World) -> None:
    agent = world.agent
    if agent_blocked(world, agent.facing):
        raise MovementBlocked(agent.x, agent.y, agent.facing)
    dx, dy = agent.facing.delta()
    agent.x += dx
    agent.y += dy


def _turn_left(world: World) -> None:
    world.agent.facing = world.agent.facing.turn_left()


def _pick_beeper(world: World) -> None:
    x, y = world.agent.position
    if world.beepers_at(x, y) <= 0:
        raise NoBeeperHere(x, y)
    world.remove_beeper(x, y)
    if not world.has_unbounded_bag:
        world.bag += 1


def _put_beeper(world: World) -> None:
    if not world.has_unbounded_bag and world.bag <= 0:
        raise BagEmpty()
    x, y = world.agent.position
    world.add_beeper(x, y)
    if not world.has_unbounded_bag:
        world.bag -= 1


# ---------------------------------------------------------------------------
# Conditions
# ---------------------------------------------------------------------------

def _beepers_here(world: World) -> int:
    return world.beepers_at(world.agent.x, world.agent.y)


def _facing(direction: Direction) -> Callable[[World], bool]:
    return lambda world: world.agent.facing == direction


def _not_facing(direction: Direction) -> Callable[[World], bool]:
    return lambda world: world.agent.facing != direction


_CONDITION_FUNCS = {
    "front_is_clear": lambda w: not agent_blocked(w, front_direction(w)),
    "front_is_blocked": lambda w: agent_blocked(w, front_direction(w)),
    "left_is_clear": lambda w: not agent_blocked(w, left_direction(w)),
    "left_is_blocked": lambda w: agent_blocked(w, left_direction(w)),
    "right_is_clear": lambda w: not agent_blocked(w, right_direction(w)),
    "right_is_blocked": lambda w: agent_blocked(w, right_direction(w)),
    "beepers_present": lambda w: _beepers_here(w) > 0,
    "no_beepers_present": lambda w: _beepers_here(w) == 0,
    "beepers_in_bag": lambda w: w.bag > 0,
    "no_beepers_in_bag": lambda w: w.bag <= 0,
}
for _direction in Direction.all():
    _CONDITION_FUNCS[f"facing_{_direction.label}"] = _facing(_direction)
    _CONDITION_FUNCS[f"not_facing_{_direction.label}"] = _not_facing(_direction)


# ---------------------------------------------------------------------------
# Operation registry
# ---------------------------------------------------------------------------

OPERATION_REGISTRY: dict[str, Operation] = {
    "move": Operation("move", OperationKind.ACTION, _move),
    "turn_left": Operation("turn_left", OperationKind.ACTION, _turn_left),
    "pick_beeper": Operation("pick_beeper", OperationKind.ACTION, _pick_beeper),
    "put_beeper": Operation("put_beeper", OperationKind.ACTION, _put_beeper),
}
OPERATION_REGISTRY.update({
    name: Operation(name, OperationKind.CONDITION, func)
    for name, func in _CONDITION_FUNCS.items()
})

ACTIONS = {n: op for n, op in OPERATION_REGISTRY.items() if op.kind is OperationKind.ACTION}
CONDITIONS = {n: op for n, op in OPERATION_REGISTRY.items() if op.kind is OperationKind.CONDITION}


def lookup(name: str) -> Optional[Operation]:
    return OPERATION_REGISTRY.get(name)


def is_condition(name: str) -> bool:
    return name in CONDITIONS


def evaluate_condition(condition: str, world: World) -> bool:
    """
    Evaluate a condition as written in a while/if header.

    Call parentheses are stripped first, so ``front_is_clear()`` and
    ``front_is_clear`` are the same condition.
    """
    name = condition.replace("()", "").strip()
    op = CONDITIONS.get(name)
    if op is None:
        raise UnknownCondition(condition)
    return bool(op(world))
