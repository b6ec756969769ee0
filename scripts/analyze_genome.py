#!/usr/bin/env python3
"""Analyze a consumer DNA export against the reference databases."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from genoscan import (  # noqa: E402
    FetchPolicy,
    GenomeParseError,
    build_default_extractor_registry,
    build_default_pipeline,
)
from genoscan.report import (  # noqa: E402
    CATEGORY_ALIASES,
    build_report,
    filter_findings,
    render_text,
)

logger = logging.getLogger("analyze_genome")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Analyze a raw DNA export against the reference databases",
        epilog=(
            f"Formats: {', '.join(build_default_extractor_registry().labels().values())}. "
            f"Category aliases: {', '.join(CATEGORY_ALIASES)}"
        ),
    )
    parser.add_argument("file", help="Path to the raw genome export")
    parser.add_argument("--json", action="store_true", help="Emit the report as JSON")
    parser.add_argument("--category", help="Only show findings in this category or alias")
    parser.add_argument(
        "--min-magnitude",
        type=int,
        default=0,
        help="Only show findings with magnitude >= N (0-6)",
    )
    parser.add_argument("--clinvar", help="Override the pathogenic-variant table URL or path")
    parser.add_argument("--pharmgkb", help="Override the drug-gene table URL or path")
    parser.add_argument("--timeout", type=float, default=30.0, help="Per-request timeout (seconds)")
    parser.add_argument("--retries", type=int, default=2, help="Retries per remote table")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def emit_error(message: str, as_json: bool) -> int:
    if as_json:
        print(json.dumps({"success": False, "error": message}, indent=2))
    else:
        print(f"Error: {message}", file=sys.stderr)
    return 1


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    path = Path(args.file).expanduser().resolve()
    if not path.is_file():
        return emit_error(f"File not found: {path}", args.json)

    overrides = {}
    if args.clinvar:
        overrides["clinvar"] = args.clinvar
    if args.pharmgkb:
        overrides["pharmgkb"] = args.pharmgkb

    pipeline = build_default_pipeline(
        policy=FetchPolicy(timeout=args.timeout, retries=args.retries),
        overrides=overrides,
    )

    try:
        content = pipeline.parser.read_file(path)
        result = pipeline.run_sync(content)
    except (GenomeParseError, UnicodeDecodeError) as exc:
        logger.debug("Parse failed", exc_info=True)
        return emit_error(str(exc), args.json)

    findings = filter_findings(result.findings, args.category, args.min_magnitude)

    if args.json:
        print(json.dumps(build_report(result, findings, file_path=str(path)), indent=2))
    else:
        print(render_text(result, findings, file_path=str(path)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
