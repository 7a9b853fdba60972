#!/usr/bin/env python3
"""
Docs Lint CLI

Command-line interface for checking a Markdown documentation tree.

Exit codes:
    0 - all checks passed
    1 - lint failures
    2 - usage or configuration error
"""

import argparse
import logging
import sys

from app.config import get_settings
from lib.utils import ApplicationError
from linter.checks import list_checks
from linter.engine import DocsLinter

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_LINT_FAILED = 1
EXIT_USAGE = 2


def configure_logging(verbose: bool) -> None:
    """Log to stderr so --format json output stays parseable."""
    settings = get_settings()
    level = logging.DEBUG if verbose or settings.DEBUG else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def run_check(args: argparse.Namespace) -> int:
    """Lint a docs directory and print the report."""
    settings = get_settings()

    options = settings.lint_options(
        strict=True if args.strict else None,
        allow_untagged_fences=True if args.allow_untagged else None,
    )
    if args.disable:
        options.disabled_checks = sorted(set(options.disabled_checks) | set(args.disable))
    if args.language:
        options.allowed_languages = sorted(
            set(options.allowed_languages) | {lang.lower() for lang in args.language}
        )
    if args.exclude:
        options.exclude = options.exclude + args.exclude

    docs_root = args.docs_root or settings.DOCS_ROOT

    try:
        linter = DocsLinter(options)
        report = linter.lint_directory(docs_root)
    except ApplicationError as e:
        print(str(e), file=sys.stderr)
        return EXIT_USAGE

    if args.format == "json":
        print(report.model_dump_json(indent=2))
    else:
        print(report.format_for_display())

    return EXIT_OK if report.passed else EXIT_LINT_FAILED


def run_rules(args: argparse.Namespace) -> int:
    """Print the registered checks."""
    checks = list_checks()
    width = max((len(name) for name in checks), default=0)

    for name, info in checks.items():
        print(f"{name.ljust(width)}  [{info['scope']}]  {info['description']}")

    return EXIT_OK


def run_serve(args: argparse.Namespace) -> int:
    """Start the HTTP API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=args.host or settings.API_HOST,
        port=args.port or settings.API_PORT,
        reload=args.reload,
    )
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docsite-lint",
        description="Check a Markdown documentation site for integrity problems"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Lint a directory
    check_parser = subparsers.add_parser("check", help="Lint a documentation directory")
    check_parser.add_argument(
        "docs_root",
        nargs="?",
        default=None,
        help="Directory containing the Markdown pages (default: DOCS_ROOT)"
    )
    check_parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)"
    )
    check_parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat warnings as failures"
    )
    check_parser.add_argument(
        "--disable",
        action="append",
        default=[],
        metavar="CHECK",
        help="Skip a check by name (repeatable)"
    )
    check_parser.add_argument(
        "--allow-untagged",
        action="store_true",
        help="Accept code fences without a language tag"
    )
    check_parser.add_argument(
        "--language",
        action="append",
        default=[],
        metavar="LANG",
        help="Accept an extra code fence language (repeatable)"
    )
    check_parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="GLOB",
        help="Skip pages matching a glob relative to the docs root (repeatable)"
    )

    # List checks
    subparsers.add_parser("rules", help="List available checks")

    # HTTP API
    serve_parser = subparsers.add_parser("serve", help="Run the lint HTTP API")
    serve_parser.add_argument("--host", default=None, help="Bind host (default: API_HOST)")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port (default: API_PORT)")
    serve_parser.add_argument("--reload", action="store_true", help="Auto-reload on code changes")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_USAGE

    configure_logging(args.verbose)

    commands = {
        "check": run_check,
        "rules": run_rules,
        "serve": run_serve,
    }
    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
