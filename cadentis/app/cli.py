"""Command line entry point: analyse a text file and print the JSON response."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Optional, Sequence, TextIO

from ..utils.logging_config import configure_logging, parse_log_level
from .dispatch import handle_request
from .protocol import AnalysisRequest, AnalysisType
from .worker_pool import new_request_id


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cadentis",
        description="Quantitative prosody analysis: syllables, meter and rhyme.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default="-",
        help="Text file to analyse (defaults to standard input).",
    )
    parser.add_argument(
        "--type",
        dest="analysis_type",
        default=AnalysisType.VERSE_ANALYSIS.value,
        help=(
            "Analysis to run: "
            + ", ".join(member.value for member in AnalysisType)
            + " (default: verse-analysis)."
        ),
    )
    parser.add_argument("--id", dest="request_id", help="Correlation id for the request.")
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation; 0 prints compact output.",
    )
    parser.add_argument(
        "--log-level",
        type=parse_log_level,
        default=None,
        help="Logging level name or number (overrides CADENTIS_LOG_LEVEL).",
    )
    return parser


def _read_text(path: str, stdin: TextIO) -> str:
    if path == "-":
        return stdin.read()
    with open(path, encoding="utf-8") as handle:
        return handle.read()


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        text = _read_text(args.path, stdin or sys.stdin)
    except OSError as exc:
        print(f"cadentis: cannot read {args.path}: {exc}", file=sys.stderr)
        return 2

    request = AnalysisRequest(
        id=args.request_id or new_request_id(),
        text=text,
        analysis_type=args.analysis_type,
    )
    response = handle_request(request)

    indent = args.indent if args.indent > 0 else None
    out = stdout or sys.stdout
    out.write(json.dumps(response.as_dict(), ensure_ascii=False, indent=indent))
    out.write("\n")
    return 0 if response.ok else 1


__all__ = ["main"]
