"""CLI entrypoints for routedoc commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import ConfigError
from .errors import RouteDocError
from .extractor import SpecExtractor
from .logging import configure_logging


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    # Also accepted after the subcommand name.
    default_flag: object = argparse.SUPPRESS if suppress_default else False
    default_path: object = argparse.SUPPRESS if suppress_default else None
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default_flag,
        help="Log association decisions for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default_flag,
        help="Only log warnings and errors.",
    )
    parser.add_argument(
        "--log-file",
        default=default_path,
        help="Also write debug logs to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="routedoc",
        description="Extract an API specification from JSDoc route annotations.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract_parser = subparsers.add_parser(
        "extract",
        help="Print or write the specification for a source tree.",
    )
    _add_logging_options(extract_parser, suppress_default=True)
    extract_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the source root (defaults to current directory).",
    )
    extract_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write the JSON specification to this file instead of stdout.",
    )
    extract_parser.add_argument(
        "--indent",
        type=int,
        default=None,
        help="JSON indentation (defaults to the configured value, 2).",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service.",
    )
    _add_logging_options(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for routedoc commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        quiet=bool(args.quiet),
        log_file=Path(args.log_file) if args.log_file else None,
    )

    if args.command == "extract":
        extractor = SpecExtractor()
        try:
            root = Path(args.path).expanduser().resolve()
            config = extractor.load_config(root)
            application = extractor.extract(root)
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        except (RouteDocError, ConfigError) as exc:
            parser.exit(1, f"routedoc extract failed: {exc}\n")

        indent = args.indent if args.indent is not None else config.output.indent
        payload = json.dumps(application.to_dict(), indent=indent, ensure_ascii=False)
        output = Path(args.output) if args.output else config.output.path
        if output is None:
            print(payload)
        else:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(payload + "\n", encoding="utf-8")
            print(f"Specification written to {_relativize(output)}")
    elif args.command == "serve":
        from .service import run_service

        try:
            run_service(host=args.host, port=args.port)
        except RuntimeError as exc:
            parser.exit(1, f"{exc}\n")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
