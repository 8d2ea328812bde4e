"""CLI entrypoints for readmegen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .logging import configure_logging
from .models import TrackMode
from .orchestrator import GenerationError, Orchestrator


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


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to .readmegen.yml or the directory holding it.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="readmegen",
        description="Generate README documents from a description or a GitHub repository.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    _add_config_option(serve_parser)
    serve_parser.add_argument("--host", default="0.0.0.0", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")
    serve_parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write service and access logs to this file.",
    )

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate a single document and print it.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_config_option(generate_parser)
    generate_parser.add_argument(
        "text",
        help="Free-form request, optionally containing a GitHub repository URL.",
    )
    generate_parser.add_argument(
        "--mode",
        choices=[track.value for track in TrackMode],
        default=TrackMode.README.value,
        help="Generation track (defaults to readme).",
    )
    generate_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the document to this file instead of stdout.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for readmegen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    if args.command == "serve":
        from .service import run_service

        run_service(
            args.host,
            args.port,
            config_path=args.config,
            verbose=bool(args.verbose),
            log_file=args.log_file,
        )
    elif args.command == "generate":
        orchestrator = Orchestrator.from_config(config)
        try:
            result = orchestrator.generate(args.text, "", args.mode)
        except GenerationError as exc:
            message = f"readmegen generate failed ({exc.kind.value}): {exc.message}\n"
            if exc.suggestion:
                message += f"{exc.suggestion}\n"
            parser.exit(1, message)
        if args.output is not None:
            args.output.write_text(result.document + "\n", encoding="utf-8")
            print(f"README written to {args.output}")
        else:
            print(result.document)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
