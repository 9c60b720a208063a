"""Tests for the execution engine."""

import unittest

from karel_engine.commands import evaluate_condition
from karel_engine.engine import EngineConfig, RunResult, run
from karel_engine.errors import (
    CallDepthExceeded,
    KarelError,
    MovementBlocked,
    NoBeeperHere,
    NoEntryPoint,
    StepLimitExceeded,
    UnknownCommand,
    UnknownCondition,
)
from karel_engine.worlds.codec import parse_world
from karel_engine.worlds.grid import Agent, Direction


def program(*body_lines: str, extra: str = "") -> str:
    """Build a main() with the given body lines, indented four spaces."""
    body = "\n".join("    " + line if line else "" for line in body_lines)
    return f"def main():\n{body}\n{extra}"


class TestBasicRun(unittest.TestCase):
    """Straight-line programs."""

    def setUp(self):
        self.world = parse_world("Dimension: (3, 1)\nKarel: (1, 1); east")

    def test_two_moves(self):
        result = run(program("move()", "move()"), self.world)
        self.assertIsInstance(result, RunResult)
        self.assertEqual(result.final_world.agent, Agent(3, 1, Direction.EAST))
        self.assertEqual(result.actions, ["move", "move"])

    def test_third_move_blocked(self):
        with self.assertRaises(MovementBlocked) as ctx:
            run(program("move()", "move()", "move()"), self.world)
        error = ctx.exception
        self.assertEqual([e.action for e in error.trace], ["move", "move"])
        self.assertEqual(error.world.agent.position, (3, 1))

    def test_initial_world_untouched(self):
        run(program("move()"), self.world)
        self.assertEqual(self.world.agent.position, (1, 1))

    def test_trace_snapshots_are_independent(self):
        result = run(program("move()", "move()"), self.world)
        first, second = result.trace
        self.assertEqual(first.world.agent.x, 2)
        self.assertEqual(second.world.agent.x, 3)
        self.assertIsNot(first.world, result.final_world)
        self.assertIsNot(second.world, result.final_world)

    def test_comments_docstrings_and_pass(self):
        script = program(
            '"""',
            "Walk east.",
            '"""',
            "# step once",
            "pass()",
            "move()",
        )
        result = run(script, self.world)
        self.assertEqual(result.actions, ["move"])


class TestBeeperScenario(unittest.TestCase):

    def setUp(self):
        self.world = parse_world("Dimension: (2, 2)\nBeeper: (1, 1); 1")

    def test_pick_then_put(self):
        result = run(program("pick_beeper()", "put_beeper()"), self.world)
        self.assertEqual(result.final_world.beepers_at(1, 1), 1)
        self.assertEqual(result.final_world.bag, 0)

    def test_second_pick_fails(self):
        with self.assertRaises(NoBeeperHere) as ctx:
            run(program("pick_beeper()", "pick_beeper()"), self.world)
        self.assertEqual(len(ctx.exception.trace), 1)
        self.assertEqual(ctx.exception.world.bag, 1)


class TestControlFlow(unittest.TestCase):

    def test_while_moves_to_wall(self):
        world = parse_world("Dimension: (6, 2)\nKarel: (2, 1); east")
        script = program("while front_is_clear():", "    move()")
        result = run(script, world)
        self.assertEqual(result.actions, ["move"] * 4)
        self.assertEqual(result.final_world.agent.position, (6, 1))
        self.assertTrue(evaluate_condition("front_is_blocked", result.final_world))

    def test_while_false_never_runs(self):
        world = parse_world("Dimension: (1, 1)")
        result = run(program("while front_is_clear():", "    move()", "turn_left()"), world)
        self.assertEqual(result.actions, ["turn_left"])

    def test_if_runs_once(self):
        world = parse_world("Dimension: (3, 3)\nBeeper: (1, 1); 2")
        script = program("if beepers_present():", "    pick_beeper()", "move()")
        result = run(script, world)
        self.assertEqual(result.actions, ["pick_beeper", "move"])
        self.assertEqual(result.final_world.beepers_at(1, 1), 1)

    def test_if_else(self):
        world = parse_world("Dimension: (3, 3)\nBeeperBag: 1")
        script = program(
            "if beepers_present():",
            "    pick_beeper()",
            "else:",
            "    put_beeper()",
        )
        result = run(script, world)
        self.assertEqual(result.actions, ["put_beeper"])

    def test_elif_chain_takes_first_true_branch(self):
        world = parse_world("Dimension: (3, 3)\nKarel: (1, 1); north")
        script = program(
            "if facing_east():",
            "    move()",
            "elif facing_north():",
            "    turn_left()",
            "elif not_facing_south():",
            "    move()",
            "else:",
            "    move()",
            "turn_left()",
        )
        result = run(script, world)
        self.assertEqual(result.actions, ["turn_left", "turn_left"])

    def test_nested_loops(self):
        # Fill a 3x2 world row by row.
        world = parse_world("Dimension: (3, 2)\nBeeperBag: infinity")
        script = program(
            "put_beeper()",
            "while front_is_clear():",
            "    move()",
            "    put_beeper()",
            "turn_left()",
            "move()",
            "turn_left()",
            "put_beeper()",
            "while front_is_clear():",
            "    move()",
            "    put_beeper()",
        )
        result = run(script, world)
        self.assertEqual(len(result.final_world.beepers), 6)
        self.assertEqual(result.final_world.agent, Agent(1, 2, Direction.WEST))

    def test_unknown_condition(self):
        world = parse_world("Dimension: (3, 3)")
        with self.assertRaises(UnknownCondition):
            run(program("while sky_is_blue():", "    move()"), world)


class TestProcedures(unittest.TestCase):

    def setUp(self):
        self.world = parse_world("Dimension: (3, 3)\nKarel: (1, 1); north")

    def test_user_procedure(self):
        script = program(
            "turn_right()",
            "move()",
            extra="\ndef turn_right():\n    turn_left()\n    turn_left()\n    turn_left()\n",
        )
        result = run(script, self.world)
        self.assertEqual(result.final_world.agent, Agent(2, 1, Direction.EAST))
        self.assertEqual(result.actions, ["turn_left"] * 3 + ["move"])

    def test_procedure_defined_before_main(self):
        script = "def spin():\n    turn_left()\n\n" + program("spin()")
        result = run(script, self.world)
        self.assertEqual(result.final_world.agent.facing, Direction.WEST)

    def test_missing_main(self):
        with self.assertRaises(NoEntryPoint):
            run("def start():\n    move()\n", self.world)

    def test_missing_main_runs_nothing(self):
        steps = []
        with self.assertRaises(NoEntryPoint):
            run("def start():\n    move()\n", self.world,
                on_step=lambda w, a: steps.append(a))
        self.assertEqual(steps, [])

    def test_unknown_command(self):
        with self.assertRaises(UnknownCommand) as ctx:
            run(program("jump()"), self.world)
        self.assertEqual(ctx.exception.name, "jump")

    def test_condition_as_statement_ignored(self):
        result = run(program("front_is_clear()", "move()"), self.world)
        self.assertEqual(result.actions, ["move"])

    def test_reserved_entry_alias_ignored(self):
        result = run(program("run_karel_program()"), self.world)
        self.assertEqual(result.actions, [])

    def test_custom_entry_point(self):
        config = EngineConfig(entry_point="start")
        result = run("def start():\n    move()\n", self.world, config=config)
        self.assertEqual(result.actions, ["move"])


class TestObserver(unittest.TestCase):

    def test_observer_gets_each_action(self):
        world = parse_world("Dimension: (3, 1)")
        seen = []
        run(program("move()", "turn_left()"), world,
            on_step=lambda w, action: seen.append((action, w.agent.x)))
        self.assertEqual(seen, [("move", 2), ("turn_left", 2)])

    def test_observer_mutation_does_not_leak(self):
        world = parse_world("Dimension: (4, 1)")

        def meddle(snapshot, action):
            snapshot.agent.x = 1
            snapshot.bag = 99

        result = run(program("move()", "move()"), world, on_step=meddle)
        self.assertEqual(result.final_world.agent.x, 3)
        self.assertEqual(result.final_world.bag, 0)
        self.assertEqual(result.trace[0].world.agent.x, 2)


class TestStepLimit(unittest.TestCase):

    def test_infinite_loop_stopped(self):
        world = parse_world("Dimension: (2, 2)")
        script = program("while no_beepers_present():", "    turn_left()")
        with self.assertRaises(StepLimitExceeded) as ctx:
            run(script, world)
        error = ctx.exception
        self.assertEqual(error.limit, 10000)
        self.assertEqual(error.steps_used, 10001)
        self.assertGreater(len(error.trace), 0)

    def test_custom_limit(self):
        world = parse_world("Dimension: (10, 1)")
        script = program("move()", "move()", "move()")
        with self.assertRaises(StepLimitExceeded) as ctx:
            run(script, world, config=EngineConfig(max_steps=2))
        self.assertEqual(len(ctx.exception.trace), 2)

    def test_blank_and_comment_lines_free(self):
        world = parse_world("Dimension: (10, 1)")
        script = program("", "# nothing", "", "move()")
        result = run(script, world, config=EngineConfig(max_steps=1))
        self.assertEqual(result.steps_used, 1)

    def test_endless_recursion(self):
        world = parse_world("Dimension: (2, 2)")
        with self.assertRaises(CallDepthExceeded) as ctx:
            run(program("turn_left()", "main()"), world)
        self.assertIsInstance(ctx.exception, StepLimitExceeded)
        self.assertGreater(len(ctx.exception.trace), 100)
        self.assertIn("main()", str(ctx.exception))

    def test_recursive_walk_deeper_than_one_hundred_levels(self):
        world = parse_world("Dimension: (150, 1)\nKarel: (1, 1); east")
        walker = "\ndef walk():\n    if front_is_clear():\n        move()\n        walk()\n"
        result = run(program("walk()", extra=walker), world)
        self.assertEqual(result.actions, ["move"] * 149)
        self.assertEqual(result.final_world.agent.position, (150, 1))

    def test_all_errors_are_karel_errors(self):
        world = parse_world("Dimension: (1, 1)")
        with self.assertRaises(KarelError):
            run(program("move()"), world)


if __name__ == "__main__":
    unittest.main()
