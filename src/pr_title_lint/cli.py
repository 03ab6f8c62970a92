"""
Command line entry point for CI.

Reads the title from the first argument or the PR_TITLE environment variable,
prints any issues and exits non-zero when the title is invalid.
"""
import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from pr_title_lint.core.config import ConfigValidationError, load_config
from pr_title_lint.core.validator import TitleValidator

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pr-title-lint",
        description="Validate a pull request title.",
    )
    parser.add_argument(
        "title",
        nargs="?",
        help="PR title to check (defaults to $PR_TITLE)",
    )
    parser.add_argument("--config", help="Path to a YAML config file")
    parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    title = args.title if args.title is not None else os.environ.get("PR_TITLE")
    if not title:
        print("No PR title provided (pass it as an argument or set PR_TITLE).", file=sys.stderr)
        return EXIT_USAGE

    try:
        config = load_config(args.config)
    except ConfigValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return EXIT_USAGE

    issues = TitleValidator(config).validate(title)

    if args.format == "json":
        print(json.dumps({
            "title": title,
            "valid": not issues,
            "issues": [issue.to_dict() for issue in issues],
        }))
    elif issues:
        print(f"PR title has {len(issues)} issue(s): {title}")
        for issue in issues:
            print(f"- {issue.message}")
    else:
        print(f"PR title matches convention: {title}")

    return EXIT_INVALID if issues else EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
