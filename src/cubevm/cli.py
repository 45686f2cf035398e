"""
Command line driver for the bundled demo programs.

Usage:
    python -m cubevm.cli demos
    python -m cubevm.cli run name-age
    python -m cubevm.cli run number-game --rounds 10 --seed 7 [--trace]
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional

from .demos import DEMOS
from .kernel.runner import run_program
from .kernel.schema import ExecutionContext
from .kernel.vm import VmEngine
from .lib import install_std


# =============================================================================
# Context Resolution
# =============================================================================

def resolve_seed(explicit: Optional[int]) -> Optional[int]:
    """
    Resolve the RNG seed:
    1. Explicit flag
    2. Environment variable CUBEVM_SEED
    3. None (unseeded)
    """
    if explicit is not None:
        return explicit

    env_seed = os.environ.get("CUBEVM_SEED")
    if env_seed:
        try:
            return int(env_seed)
        except ValueError:
            print(f"⚠️  Ignoring non-integer CUBEVM_SEED: {env_seed}", file=sys.stderr)

    return None


def configure_logging(trace: bool) -> None:
    """Instruction traces go to stderr so program output stays clean."""
    logging.basicConfig(
        level=logging.DEBUG if trace else logging.WARNING,
        format="%(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )


# =============================================================================
# Commands
# =============================================================================

def cmd_demos(args: argparse.Namespace) -> int:
    """List the bundled demos."""
    for demo in DEMOS.values():
        print(f"  {demo.name:<14} {demo.description}")
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    """Run one demo on a fresh engine."""
    demo = DEMOS.get(args.demo)
    if demo is None:
        print(f"✗ Unknown demo: {args.demo}", file=sys.stderr)
        return 1

    context = ExecutionContext(seed=resolve_seed(args.seed))
    engine = VmEngine(context=context)
    install_std(engine, demo.natives)

    if args.rounds is not None and demo.takes_rounds:
        program = demo.build(args.rounds)
    else:
        program = demo.build()

    result = run_program(engine, program)
    if not result.ok:
        print(f"✗ {result.error_kind}: {result.error_message}", file=sys.stderr)
        return 1
    return 0


# =============================================================================
# Main
# =============================================================================

def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="cubevm",
        description="Cube Virtual Machine - demo runner",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("demos", help="List the bundled demo programs")

    run_parser = subparsers.add_parser("run", help="Run a demo program")
    run_parser.add_argument("demo", help="Demo name (see `cubevm demos`)")
    run_parser.add_argument("--seed", type=int, help="Seed for the rand native")
    run_parser.add_argument("--rounds", type=int, help="Rounds for number-game")
    run_parser.add_argument("--trace", action="store_true", help="Log every instruction to stderr")

    args = parser.parse_args(argv)
    if args.command == "run" and args.rounds is not None:
        demo = DEMOS.get(args.demo)
        if demo is not None and not demo.takes_rounds:
            parser.error(f"--rounds does not apply to {demo.name}")
    configure_logging(getattr(args, "trace", False))

    if args.command == "demos":
        return cmd_demos(args)
    elif args.command == "run":
        return cmd_run(args)

    return 1


if __name__ == "__main__":
    sys.exit(main())
