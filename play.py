"""
play.py — Run the SK01 (Stickochet) game locally.

Usage:
    python play.py                  # Play with default seed 0 in terminal mode
    python play.py --seed 42        # Play with a specific seed
    python play.py --agent          # Run the sample agent (random actions)
    python play.py --demo           # Replay a short scripted session

Controls (terminal / human play):
    ACTION1 = W / ↑      (Up)
    ACTION2 = S / ↓      (Down)
    ACTION3 = A / ←      (Left)
    ACTION4 = D / →      (Right)
    ACTION5 = Space      (Next level, only on the goal)
    ACTION7 = Backspace  (Give up: new board, costs one checkpoint)
"""

import argparse
import logging
import random

import arc_agi
from arcengine import GameAction

GAME_ID = "sk01-v1"
ENVIRONMENTS_DIR = "./environment_files"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def play_human(seed: int = 0) -> None:
    """Launch the game in terminal render mode for human play."""
    arc = arc_agi.Arcade(environments_dir=ENVIRONMENTS_DIR)
    env = arc.make(GAME_ID, seed=seed, render_mode="terminal")

    print("=" * 60)
    print("  SK01 — Stickochet")
    print("  Slide until something stops you. Reach the goal.")
    print("=" * 60)
    print()
    print("  Walls stop you one cell short. Goop stops you ON it.")
    print("  Rest on yellow checkpoints to collect them, then")
    print("  land on the green goal and press Space for a new board.")
    print()
    print("  Controls: ARROW KEYS, Space = next level, Backspace = give up")
    print("=" * 60)

    if env is None:
        logger.error("Could not create environment %s", GAME_ID)
        return

    try:
        input("\nPress Enter to view scorecard when done...\n")
    except (KeyboardInterrupt, EOFError):
        pass

    print(arc.get_scorecard())


def play_agent(seed: int = 0, max_steps: int = 500) -> None:
    """Run a random agent; it advances whenever it happens to win."""
    arc = arc_agi.Arcade(environments_dir=ENVIRONMENTS_DIR)
    env = arc.make(GAME_ID, seed=seed, render_mode="terminal")

    rng = random.Random(seed)
    moves = [
        GameAction.ACTION1,
        GameAction.ACTION2,
        GameAction.ACTION3,
        GameAction.ACTION4,
    ]

    logger.info("Running random agent for up to %d steps (seed=%d)", max_steps, seed)

    for _ in range(max_steps):
        env.step(rng.choice(moves))
        # Advancing is refused unless the last move landed on the goal.
        env.step(GameAction.ACTION5)

    logger.info("Agent completed %d steps", max_steps)
    print(arc.get_scorecard())


def play_scripted_demo(seed: int = 0) -> None:
    """Run a short scripted demo: a lap of moves, a give-up, another lap."""
    arc = arc_agi.Arcade(environments_dir=ENVIRONMENTS_DIR)
    env = arc.make(GAME_ID, seed=seed, render_mode="terminal")

    demo_actions = [
        GameAction.ACTION1,
        GameAction.ACTION4,
        GameAction.ACTION2,
        GameAction.ACTION3,
        GameAction.ACTION5,   # refused unless on the goal
        GameAction.ACTION7,   # give up
        GameAction.ACTION3,
        GameAction.ACTION1,
        GameAction.ACTION4,
        GameAction.ACTION2,
    ]

    for action in demo_actions:
        env.step(action)

    logger.info("Demo complete")
    print(arc.get_scorecard())


def main():
    parser = argparse.ArgumentParser(
        description="Play SK01 — Stickochet (ARC-AGI-3 Game)"
    )
    parser.add_argument(
        "--seed", type=int, default=0,
        help="Random seed for board generation (default: 0)"
    )
    parser.add_argument(
        "--agent", action="store_true",
        help="Run the sample random agent instead of human play"
    )
    parser.add_argument(
        "--demo", action="store_true",
        help="Run a short scripted demo"
    )
    parser.add_argument(
        "--steps", type=int, default=500,
        help="Max steps for agent mode (default: 500)"
    )
    parser.add_argument(
        "--log-level", default="INFO",
        help="Logging level (default: INFO)"
    )

    args = parser.parse_args()
    configure_logging(args.log_level)

    if args.agent:
        play_agent(seed=args.seed, max_steps=args.steps)
    elif args.demo:
        play_scripted_demo(seed=args.seed)
    else:
        play_human(seed=args.seed)


if __name__ == "__main__":
    main()
