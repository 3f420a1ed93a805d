"""CLI entrypoint for `cargo fund`."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import resolve_settings
from .errors import FundError
from .logging import configure_logging
from .metadata import MetadataOptions
from .orchestrator import Orchestrator


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cargo",
        description="Display funding links for workspace dependencies.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    fund_parser = subparsers.add_parser(
        "fund",
        help="Display funding links for workspace dependencies.",
    )
    fund_parser.add_argument(
        "--github-api-token",
        metavar="TOKEN",
        help=(
            "Github API token, which must have the scope `public_repo`. Overrides the token "
            "provided in the CARGO_FUND_GITHUB_API_TOKEN environment variable."
        ),
    )
    fund_parser.add_argument(
        "--manifest-path",
        metavar="PATH",
        help="Path to Cargo.toml.",
    )
    fund_parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Use verbose output (-vv very verbose/build.rs output).",
    )
    fund_parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="No output printed to stdout other than the funding information.",
    )
    fund_parser.add_argument(
        "--color",
        metavar="WHEN",
        help="Coloring: auto, always, never.",
    )
    fund_parser.add_argument(
        "-Z",
        dest="unstable_flags",
        metavar="FLAG",
        action="append",
        default=[],
        help="Unstable (nightly-only) flags to Cargo.",
    )
    fund_parser.add_argument(
        "--config",
        metavar="PATH",
        type=Path,
        help="Path to a .cargo-fund.yml file or the directory holding it.",
    )
    fund_parser.add_argument(
        "--log-file",
        metavar="PATH",
        type=Path,
        help="Also write debug logs to this file.",
    )
    return parser


def _metadata_options(args: argparse.Namespace) -> MetadataOptions:
    return MetadataOptions(
        manifest_path=args.manifest_path,
        quiet=bool(args.quiet),
        verbose=int(args.verbose),
        color=args.color,
        unstable_flags=list(args.unstable_flags),
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint; Cargo invokes it as `cargo-fund fund ...`."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        configure_logging(verbosity=int(args.verbose), log_file=args.log_file)
        settings = resolve_settings(token=args.github_api_token, config_path=args.config)
        orchestrator = Orchestrator(settings)
        output = orchestrator.run(_metadata_options(args))
    except FundError as exc:
        parser.exit(1, f"Error: {exc}\n")
    sys.stdout.write(output)


if __name__ == "__main__":
    main(sys.argv[1:])
