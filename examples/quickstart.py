"""
Quick start example for Karel Engine.

Demonstrates the core workflow:
1. Parse a start world and a goal world from world-file text
2. Check and run a Karel program, watching each action as it happens
3. Grade the result and replay the recorded trace
"""

from karel_engine import check_solution, check_syntax, parse_world, run


WORLD = """Dimension: (5, 3)
Wall: (3, 1); north
Beeper: (2, 1); 1
Beeper: (4, 1); 2
Karel: (1, 1); east
BeeperBag: 0
"""

GOAL = """Dimension: (5, 3)
Karel: (5, 1); east
"""

PROGRAM = '''def main():
    """Collect every beeper along the bottom street."""
    collect_here()
    while front_is_clear():
        move()
        collect_here()


def collect_here():
    while beepers_present():
        pick_beeper()
'''


def main():
    world = parse_world(WORLD)

    print("Karel Engine: Quick Start")
    print("=" * 50)
    print(world.render())
    print()

    # --- Static checks ---
    diagnostics = check_syntax(PROGRAM)
    print(f"Syntax check: {len(diagnostics)} problem(s)")
    for d in diagnostics:
        print(f"  {d}")
    print()

    # --- Run with a live observer ---
    def show(snapshot, action):
        agent = snapshot.agent
        print(f"  {action:12s} → ({agent.x}, {agent.y}) {agent.facing.label}"
              f"  bag={snapshot.bag}")

    result = run(PROGRAM, world, on_step=show)
    print()
    print(result.final_world.render())

    # --- Grade ---
    assessment = check_solution(PROGRAM, world, GOAL)
    print()
    print(assessment.summary())

    # --- Replay ---
    print(f"\n  Replaying {len(assessment.trace)} snapshots:")
    for i, entry in enumerate(assessment.trace, start=1):
        print(f"  #{i:<3d} {entry.action}() beepers left: "
              f"{sum(entry.world.beepers.values())}")


if __name__ == "__main__":
    main()
