#!/usr/bin/env python3
import argparse
import sys

from allure_envs.cli.commands import init, list_cmd, run
from allure_envs.config import load_config
from allure_envs.core.logging_config import resolve_level, setup_logging


def main():
    parser = argparse.ArgumentParser(
        description="Allure environment scenario runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--file", "-f", type=str, help="Path to environments.yml (default: auto-detect)"
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to execute")

    # --- init command ---
    init_parser = subparsers.add_parser("init", help="Create a starter environments.yml")
    init_parser.add_argument("--force", action="store_true", help="Overwrite an existing file")

    # --- list command ---
    subparsers.add_parser("list", help="List declared environments")

    # --- run command ---
    run_parser = subparsers.add_parser("run", help="Run pytest once per environment")
    run_parser.add_argument(
        "--env",
        "-e",
        action="append",
        default=None,
        help="Environment to run (repeatable, default: all)",
    )
    run_parser.add_argument(
        "--alluredir", type=str, default=None, help="Shared Allure results directory"
    )
    run_parser.add_argument(
        "--clean-alluredir",
        action="store_true",
        help="Clean the results directory before the first scenario",
    )
    run_parser.add_argument(
        "--fail-fast", action="store_true", help="Stop after the first failing scenario"
    )
    run_parser.add_argument(
        "pytest_args", nargs=argparse.REMAINDER, help="Extra arguments for pytest (after --)"
    )

    args = parser.parse_args()

    try:
        setup_logging(resolve_level(load_config().LOG_LEVEL))

        if args.command == "init":
            init.run(args)
        elif args.command == "list":
            list_cmd.run(args)
        elif args.command == "run":
            run.run(args)
    except KeyboardInterrupt:
        print("\nAborted.")
        sys.exit(0)
    except Exception as e:
        print(f"\n❌ Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
