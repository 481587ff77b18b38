"""
Command-line interface for scenario-core.

Usage:
    scenario run specs/                  # Run every scenario under specs/
    scenario run calc_spec.py --json     # Run one file, print a JSON summary
    scenario run --fail-fast             # Stop after the first failing scenario
    scenario run -c scenario.yaml        # Use an explicit configuration file
    scenario plan specs/                 # Show classified methods without running
    scenario list specs/                 # List discovered scenarios
    scenario --version                   # Show version
"""

import argparse
import json
import logging
import sys
from typing import List, Optional, Tuple

from . import __version__
from .config import RunnerConfig, find_config_file, load_config
from .reporter import ConsoleReporter, ReportGenerator
from .runner import ScenarioRunner, discover_scenarios

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
    )


def _resolve_config(args: argparse.Namespace) -> RunnerConfig:
    """Build the runner configuration from a config file and CLI overrides."""
    if args.config:
        config = load_config(args.config)
    else:
        config_file = find_config_file()
        config = load_config(config_file) if config_file else RunnerConfig()

    if args.paths:
        config.paths = list(args.paths)
    if getattr(args, "pattern", None):
        config.pattern = args.pattern
    if getattr(args, "method_order", None):
        config.method_order = args.method_order
    return config


def _load(args: argparse.Namespace) -> Tuple[Optional[RunnerConfig], List[type]]:
    try:
        config = _resolve_config(args)
        if not config.paths:
            print("Error: No scenario paths given.", file=sys.stderr)
            print("Pass paths or create a scenario.yaml with a 'paths' list.", file=sys.stderr)
            return None, []
        return config, discover_scenarios(config.paths, config.pattern)
    except (FileNotFoundError, ValueError, ImportError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return None, []


def cmd_run(args: argparse.Namespace) -> int:
    """Run scenarios."""
    config, scenarios = _load(args)
    if config is None:
        return 2
    if not scenarios:
        print("Error: No scenarios found.", file=sys.stderr)
        return 2

    verbose = args.verbose or config.verbose
    fail_fast = args.fail_fast or config.fail_fast

    def on_scenario_start(cls: type):
        logger.debug("Running %s", cls.__name__)

    # transcripts go to stderr in JSON mode so stdout stays parseable
    runner = ScenarioRunner(
        scenarios,
        fail_fast=fail_fast,
        method_order=config.method_order,
        output=sys.stderr if args.json else None,
        on_scenario_start=on_scenario_start,
    )
    result = runner.run()

    if args.json:
        print(ReportGenerator(result).to_json(include_transcripts=False))
    else:
        reporter = ConsoleReporter(result, verbose=verbose)
        reporter.print_full_report()

    report_path = args.report or (config.report_path if config.write_report else None)
    if report_path:
        ReportGenerator(result).write_json(report_path)
        if not args.json:
            print(f"\nReport written to: {report_path}")

    return 0 if result["status"] == "PASS" else 1


def cmd_plan(args: argparse.Namespace) -> int:
    """Show the classified structure of every scenario."""
    config, scenarios = _load(args)
    if config is None:
        return 2

    plan = ScenarioRunner(scenarios, method_order=config.method_order).plan()

    if args.json:
        print(json.dumps(plan, indent=2))
        return 0

    print("=" * 70)
    print("SCENARIO PLAN")
    print("=" * 70)
    for scenario in plan["scenarios"]:
        skipped = " (skipped)" if scenario["skipped"] else ""
        print(f"\n{scenario['scenario']}{skipped} [{scenario['method_order']}]")
        if scenario["tags"]:
            print(f"  tags:     {', '.join(scenario['tags'])}")
        for role in ("arrange", "act", "teardown"):
            if scenario[role]:
                print(f"  {role + ':':9s} {', '.join(scenario[role])}")
        for example in scenario["examples"]:
            marker = " (skipped)" if example["skipped"] else ""
            print(f"  - {example['name']}{marker}")

    summary = plan["summary"]
    print()
    print(f"Total scenarios: {summary['scenarios']}")
    print(f"Total examples:  {summary['examples']}")
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """List discovered scenarios."""
    config, scenarios = _load(args)
    if config is None:
        return 2

    if not scenarios:
        print("No scenarios found.", file=sys.stderr)
        return 0

    print("Available scenarios:")
    for cls in scenarios:
        print(f"  {cls.__name__:40s} {cls.__module__}")
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "paths",
        nargs="*",
        help="Scenario files or directories (default: from configuration)",
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        help="Path to configuration file",
    )
    parser.add_argument(
        "--pattern",
        type=str,
        help="File glob used inside directories (default: *_spec.py)",
    )
    parser.add_argument(
        "--method-order",
        choices=["declaration", "legacy"],
        help="Method ordering for scenarios that do not declare one",
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        prog="scenario",
        description="Convention-driven behavior scenarios",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"scenario-core {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    run_parser = subparsers.add_parser("run", help="Run scenarios")
    _add_common_arguments(run_parser)
    run_parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop after the first failing scenario",
    )
    run_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output and debug logging",
    )
    run_parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON summary",
    )
    run_parser.add_argument(
        "--report",
        type=str,
        help="Write JSON report to file",
    )

    plan_parser = subparsers.add_parser("plan", help="Show classified methods without running")
    _add_common_arguments(plan_parser)
    plan_parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON plan",
    )

    list_parser = subparsers.add_parser("list", help="List discovered scenarios")
    _add_common_arguments(list_parser)

    args = parser.parse_args(argv)
    _configure_logging(getattr(args, "verbose", False))

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "run":
        return cmd_run(args)
    elif args.command == "plan":
        return cmd_plan(args)
    elif args.command == "list":
        return cmd_list(args)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
