"""
Command line entry point
"""

import argparse

from .configs.arena_config import PROFILES, EVAL_CONFIG, make_config
from .inputs import ManualInput
from .simulation import Simulation


def make_simulation(args) -> Simulation:
    """Build the simulation described by the `play` arguments"""
    overrides = {}
    if args.autopilot is not None:
        overrides["autopilot_start_enabled"] = args.autopilot
    cfg = make_config(args.profile, **overrides)
    manual = ManualInput(hold_to_fire=args.hold_to_fire)
    return Simulation(cfg, seed=args.seed, manual=manual, verbose=args.verbose)


def cmd_play(args):
    sim = make_simulation(args)

    # Import here so headless commands never need a display
    from .window import play
    play(sim)


def cmd_evaluate(args):
    from .evaluate import evaluate_autopilot, compare_with_random

    results = evaluate_autopilot(
        profile=args.profile,
        n_episodes=args.n_episodes,
        max_steps=args.max_steps,
        seed=args.seed,
        csv_path=args.csv,
    )
    if args.compare_random:
        print("\n")
        random_results = compare_with_random(
            profile=args.profile,
            n_episodes=args.n_episodes,
            max_steps=args.max_steps,
            seed=args.seed,
        )
        improvement = results["mean_wave"] - random_results["mean_wave"]
        print(f"\nWaves gained over random: {improvement:.2f}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Top-down wave survival arena")
    sub = parser.add_subparsers(dest="command", required=True)

    play_p = sub.add_parser("play", help="Open the game window")
    play_p.add_argument(
        "--profile",
        type=str,
        default="ranged",
        choices=sorted(PROFILES),
        help="Build profile (default: ranged)",
    )
    play_p.add_argument("--seed", type=int, default=None, help="Random seed")
    mode = play_p.add_mutually_exclusive_group()
    mode.add_argument("--autopilot", dest="autopilot", action="store_true", default=None,
                      help="Start with the autopilot on")
    mode.add_argument("--manual", dest="autopilot", action="store_false",
                      help="Start with manual control")
    play_p.add_argument("--hold-to-fire", action="store_true",
                        help="Keep attacking while the mouse button is held")
    play_p.add_argument("-v", "--verbose", action="count", default=0, help="Print wave progress")
    play_p.set_defaults(func=cmd_play)

    eval_p = sub.add_parser("evaluate", help="Run headless autopilot episodes")
    eval_p.add_argument(
        "--profile",
        type=str,
        default="ranged",
        choices=sorted(PROFILES),
        help="Build profile (default: ranged)",
    )
    eval_p.add_argument(
        "--n-episodes",
        type=int,
        default=EVAL_CONFIG["n_episodes"],
        help=f"Number of evaluation episodes (default: {EVAL_CONFIG['n_episodes']})",
    )
    eval_p.add_argument(
        "--max-steps",
        type=int,
        default=EVAL_CONFIG["max_steps"],
        help=f"Tick limit per episode (default: {EVAL_CONFIG['max_steps']})",
    )
    eval_p.add_argument(
        "--seed",
        type=int,
        default=EVAL_CONFIG["seed"],
        help=f"Random seed (default: {EVAL_CONFIG['seed']})",
    )
    eval_p.add_argument("--csv", type=str, default=None, help="Write per-episode results to CSV")
    eval_p.add_argument(
        "--compare-random",
        action="store_true",
        help="Also evaluate random policy for comparison",
    )
    eval_p.set_defaults(func=cmd_evaluate)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
