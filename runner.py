#!/usr/bin/env python3
"""
PodScratch Runner

A CLI tool for running PodScratch projects headlessly and inspecting the
block kinds the scratch pod provides.

Usage:
    python runner.py run <project.json> [--ticks N | --seconds S] [--fps F] [--no-flag]
    python runner.py kinds [--category NAME]

Commands:
    run      Load a project, click the green flag and tick it at a fixed rate
    kinds    List the registered block kinds
"""

import argparse
import logging
import sys
from typing import List, Optional

from podscratch.catalog import CATEGORIES, category_of
from podscratch.config import load_options
from podscratch.environment import Environment
from podscratch.errors import PodError
from podscratch.pod import ScratchPod
from podscratch.project_io import dump_state, load_project, save_state
from podscratch.utils import to_text

logger = logging.getLogger("podscratch.runner")


# ============================================================================
# Utility Functions
# ============================================================================

verbose_mode = False


def error(msg: str, detail: str = "") -> None:
    """Print an error message and exit."""
    print(f"Error: {msg}", file=sys.stderr)
    if verbose_mode and detail:
        print(f"  Detail: {detail}", file=sys.stderr)
    sys.exit(1)


def warn(msg: str) -> None:
    """Print a warning message."""
    print(f"Warning: {msg}", file=sys.stderr)


def info(msg: str) -> None:
    """Print an info message."""
    print(msg)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def format_value(value) -> str:
    if isinstance(value, list):
        return "[" + ", ".join(to_text(v) for v in value) + "]"
    return to_text(value)


def print_state(state: dict) -> None:
    sprites = state["sprites"]
    if sprites:
        print(f"{'Sprite':<20} {'Position':<20} {'Direction':<10} {'Shown':<6} {'Costume':<12}")
        print("-" * 70)
        for s in sprites:
            pos = f"({to_text(round(s['x'], 2))}, {to_text(round(s['y'], 2))})"
            shown = "Yes" if s["shown"] else "No"
            print(f"{s['name']:<20} {pos:<20} {to_text(s['direction']):<10} {shown:<6} {s['costume'] or '-':<12}")
    else:
        info("No sprites.")

    rows = [("All Sprites", name, value) for name, value in state["variables"].items()]
    rows += [("All Sprites", name, value) for name, value in state["lists"].items()]
    for s in sprites:
        rows += [(s["name"], name, value) for name, value in s["variables"].items()]
        rows += [(s["name"], name, value) for name, value in s["lists"].items()]
    if rows:
        print()
        print(f"{'Scope':<20} {'Variable':<20} {'Value'}")
        print("-" * 70)
        for scope, name, value in rows:
            print(f"{scope:<20} {name:<20} {format_value(value)}")


# ============================================================================
# Commands
# ============================================================================

def cmd_run(args: argparse.Namespace) -> None:
    """Run a project and print where everything ended up."""
    try:
        # An options file replaces the project's own fps and seed
        env = Environment(load_options(args.options)) if args.options else None
        env = load_project(args.project, env)
        fps = args.fps if args.fps is not None else env.fps
        pod = env.pod("scratch")

        # Event blocks arm themselves on the first tick they see
        env.tick()
        if not args.no_flag:
            pod.click_green_flag()

        try:
            frames = env.run(ticks=args.ticks, duration=args.seconds, fps=fps)
            logger.info("Ran %d frames", frames)
        except KeyboardInterrupt:
            print("\nStopped.")
    except PodError as e:
        error(e.message, e.detail)

    state = dump_state(pod)
    print_state(state)
    if args.state_out:
        save_state(args.state_out, pod)
        info(f"\nState written to {args.state_out}")

    diagnostics = env.collect_diagnostics()
    if diagnostics.has_errors() or diagnostics.has_warnings():
        print()
        diagnostics.print_all()
    print(f"\n{diagnostics.summary()}")
    if diagnostics.has_errors():
        sys.exit(1)


def cmd_kinds(args: argparse.Namespace) -> None:
    """List block kinds with their parameters and descriptions."""
    if args.category and args.category not in CATEGORIES:
        error(f"Unknown category: {args.category}", f"Available categories: {', '.join(CATEGORIES)}")
    pod = ScratchPod()
    print(f"{'Kind':<24} {'Category':<10} {'Parameters':<28} {'Description'}")
    print("-" * 100)
    for block_kind in pod.registry.kinds():
        category = category_of(block_kind.kind)
        if args.category and category != args.category:
            continue
        flags = []
        if block_kind.returns_value:
            flags.append("reporter")
        if block_kind.is_event_block:
            flags.append("event")
        description = block_kind.description
        if flags:
            description = f"[{', '.join(flags)}] {description}"
        params = ", ".join(block_kind.parameters) or "-"
        print(f"{block_kind.kind:<24} {category:<10} {params:<28} {description}")


# ============================================================================
# Argument Parser
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="runner.py",
        description="PodScratch Runner CLI. Runs block scripts without a canvas.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python runner.py run project.json --ticks 120
  python runner.py run project.json --seconds 2 --fps 30
  python runner.py kinds --category control
""",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging and detailed error messages")

    subparsers = parser.add_subparsers(dest="command", help="Command")

    run_parser = subparsers.add_parser("run", help="Run a project")
    run_parser.add_argument("project", help="Path to the project JSON file")
    limit = run_parser.add_mutually_exclusive_group()
    limit.add_argument("--ticks", "-t", type=int, help="Number of frames to run")
    limit.add_argument("--seconds", "-s", type=float, help="Seconds to run for")
    run_parser.add_argument("--fps", type=float, help="Frames per second (default: the project's fps)")
    run_parser.add_argument("--options", "-o", help="Options JSON file")
    run_parser.add_argument("--no-flag", action="store_true", help="Do not click the green flag before running")
    run_parser.add_argument("--state-out", help="Write the final state to this JSON file")
    run_parser.set_defaults(func=cmd_run)

    kinds_parser = subparsers.add_parser("kinds", help="List block kinds")
    kinds_parser.add_argument("--category", "-c", help="Only list kinds in this category")
    kinds_parser.set_defaults(func=cmd_kinds)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    global verbose_mode
    verbose_mode = args.verbose
    configure_logging(args.verbose)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    try:
        args.func(args)
    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(1)
    except PodError as e:
        if verbose_mode:
            import traceback
            traceback.print_exc()
        error(e.message, e.detail)


if __name__ == "__main__":
    main()
