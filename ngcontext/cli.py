"""CLI entrypoints for ngcontext commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .analyzers.structure import STRUCTURE_KINDS
from .config import ConfigError, load_config
from .logging import configure_logging
from .tools import FOCUS_CHOICES, GROUP_BY_CHOICES, ProjectTools


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ngcontext",
        description="Inspect an Angular project's source tree for AI assistants.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--root",
        default=".",
        help="Project root or path to its .ngcontext.yml (defaults to current directory).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    mcp_parser = subparsers.add_parser("mcp", help="Run the MCP server over stdio.")
    _add_verbose_option(mcp_parser, suppress_default=True)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service.")
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    search_parser = subparsers.add_parser("search", help="Search project files for text.")
    _add_verbose_option(search_parser, suppress_default=True)
    search_parser.add_argument("query", help="Literal text to search for (case-insensitive).")
    search_parser.add_argument(
        "--type",
        dest="file_types",
        action="append",
        default=None,
        help="Restrict to an extension such as .ts (repeatable).",
    )
    search_parser.add_argument("--directory", default=None, help="Directory relative to the root.")

    read_parser = subparsers.add_parser("read", help="Print a project file.")
    _add_verbose_option(read_parser, suppress_default=True)
    read_parser.add_argument("path", help="File path relative to the project root.")

    usage_parser = subparsers.add_parser("usage", help="Report component usage.")
    _add_verbose_option(usage_parser, suppress_default=True)
    usage_parser.add_argument("--component", default="", help="Filter by name or selector.")
    usage_parser.add_argument(
        "--group-by", choices=GROUP_BY_CHOICES, default="component", help="Report grouping."
    )
    usage_parser.add_argument(
        "--show-unused", action="store_true", help="Include components with no usages."
    )
    usage_parser.add_argument(
        "--no-context", action="store_true", help="Omit code context around usages."
    )

    structure_parser = subparsers.add_parser("structure", help="Extract a file's structure.")
    _add_verbose_option(structure_parser, suppress_default=True)
    structure_parser.add_argument("path", help="File path relative to the project root.")
    structure_parser.add_argument(
        "--kind", choices=STRUCTURE_KINDS, default="typescript", help="How to interpret the file."
    )

    inventory_parser = subparsers.add_parser(
        "inventory", help="List component and service files."
    )
    _add_verbose_option(inventory_parser, suppress_default=True)
    inventory_parser.add_argument(
        "--focus", choices=FOCUS_CHOICES, default="all", help="What to inventory."
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for ngcontext commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        config = load_config(Path(args.root))
    except ConfigError as exc:
        parser.exit(1, f"Invalid configuration: {exc}\n")

    if args.command == "mcp":
        from .server import run_stdio

        run_stdio(config)
        return
    if args.command == "serve":
        from .service import run_service

        run_service(lambda: ProjectTools(config), host=args.host, port=args.port)
        return

    tools = ProjectTools(config)
    if args.command == "search":
        output = tools.search_report(args.query, args.file_types, args.directory)
    elif args.command == "read":
        output = tools.read_file_report(args.path)
    elif args.command == "usage":
        output = tools.component_usage_report(
            args.component or None,
            include_context=not args.no_context,
            group_by=args.group_by,
            show_unused=bool(args.show_unused),
        )
    elif args.command == "structure":
        output = tools.file_structure_report(args.path, args.kind)
    elif args.command == "inventory":
        output = tools.architecture_report(args.focus)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")
    print(output)


if __name__ == "__main__":
    main(sys.argv[1:])
