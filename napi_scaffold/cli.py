"""Command-line entry point for napi-scaffold."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from pydantic import ValidationError
from rich.markup import escape

from .config import Config
from .prompts import ask_package_name, select_targets
from .scaffolder import ProjectConfig, ProjectGenerator, ScaffoldError
from .targets import AVAILABLE_TARGETS, DEFAULT_TARGETS, TripleError
from .utils import print_error, print_success, print_summary_table


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="napi-scaffold",
        description="napi-scaffold -- bootstrap napi-rs native addon projects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  napi-scaffold new my-addon\n"
            "  napi-scaffold new my-addon -n @scope/my-addon --enable-default-targets\n"
            "  napi-scaffold new my-addon -t x86_64-unknown-linux-gnu -t x86_64-apple-darwin\n"
        ),
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    new = subparsers.add_parser(
        "new",
        help="create a new project with pre-configured boilerplate",
    )
    new.add_argument(
        "path",
        help="the path where the napi-rs crate will be created",
    )
    new.add_argument(
        "--name", "-n",
        default=None,
        help="name of the napi-rs crate (prompted for when omitted)",
    )
    new.add_argument(
        "--targets", "-t",
        action="append",
        default=None,
        metavar="TRIPLE",
        help="target the crate will be compiled for (repeatable)",
    )
    new.add_argument(
        "--enable-default-targets",
        action="store_true",
        help="use the default targets",
    )
    new.add_argument(
        "--enable-all-targets",
        action="store_true",
        help="use every available target",
    )
    new.add_argument(
        "--type-def", "-d",
        action="store_true",
        help="enable the `type-def` feature for TypeScript definitions",
    )
    new.add_argument(
        "--enable-github-actions",
        action="store_true",
        help="generate a preconfigured GitHub Actions workflow",
    )
    new.add_argument(
        "--on-unsupported",
        choices=["error", "skip"],
        default=None,
        help="abort on, or skip, targets whose triple cannot be parsed "
             "(default: skip)",
    )
    new.add_argument(
        "--debug",
        action="store_true",
        help="print generated files instead of writing them (also NAPI_DEBUG)",
    )
    new.add_argument(
        "--config", "-c",
        default=None,
        metavar="FILE",
        help="load settings from a JSON config file instead of NAPI_* variables",
    )
    return parser


def _resolve_targets(args: argparse.Namespace) -> list[str]:
    if args.targets:
        return list(args.targets)
    if args.enable_default_targets:
        return list(DEFAULT_TARGETS)
    if args.enable_all_targets:
        return list(AVAILABLE_TARGETS)
    return select_targets(AVAILABLE_TARGETS, DEFAULT_TARGETS)


def _load_config(args: argparse.Namespace) -> Config:
    config = Config.load(args.config) if args.config else Config.from_env()
    if args.debug:
        config.debug = True
    if args.on_unsupported:
        config.on_unsupported = args.on_unsupported
    return config


def run_new(args: argparse.Namespace) -> int:
    """Execute ``napi-scaffold new``.  Returns the process exit code."""
    try:
        config = _load_config(args)
    except (ValidationError, OSError) as exc:
        print_error(f"Error: invalid configuration: {escape(str(exc))}")
        return 1

    name = args.name or ask_package_name(args.path)
    targets = _resolve_targets(args)

    project = ProjectConfig(
        name=name,
        targets=targets,
        type_def=args.type_def,
        github_actions=args.enable_github_actions,
    )

    try:
        result = ProjectGenerator(project, config).generate(args.path)
    except (ScaffoldError, TripleError) as exc:
        print_error(f"Error: {escape(str(exc))}")
        return 1

    print_summary_table(
        {
            "Package": project.name,
            "Crate": project.crate_name,
            "Binary": project.binary_name,
            "Platforms": ", ".join(p.platform_abi for p in result.platforms) or "-",
            "Skipped": ", ".join(result.skipped) or "-",
        },
        title="Project",
    )
    print_success(f"Created {escape(project.name)} in {escape(str(result.root))}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entry point for ``napi-scaffold`` and ``python -m napi_scaffold``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "new":
        sys.exit(run_new(args))


if __name__ == "__main__":
    main()
