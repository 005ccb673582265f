#!/usr/bin/env python3
"""
bpreader CLI — Pure Python entry point.

Usage:
    python -m bpreader parse <report.pdf> [--out FILE] [--config FILE]
                                          [--failure-log FILE] [--verbose]
    python -m bpreader classify <systolic> <diastolic>
    python -m bpreader help
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

_OUTPUT_DIR = Path("outputs") / "reports"


def cmd_parse(args: list) -> int:
    """Parse one report PDF and write its JSON."""
    ap = argparse.ArgumentParser(prog="python -m bpreader parse")
    ap.add_argument("pdf", type=Path)
    ap.add_argument("--out", type=Path, default=None)
    ap.add_argument("--config", type=Path, default=None)
    ap.add_argument("--failure-log", type=Path, default=None)
    ap.add_argument("--verbose", action="store_true")
    opts = ap.parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if opts.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not opts.pdf.exists():
        raise SystemExit(f"Missing PDF: {opts.pdf}")

    from bpreader.config import DEFAULT_CONFIG, load_config
    from bpreader.extraction.engine import ReportExtractor
    from bpreader.extraction.model import ParseFailure
    from bpreader.extraction.pages import PdfPageProvider
    from bpreader.governance.failure_log import FailureLog, log_parse_failure, log_report_issues
    from bpreader.reporting.aggregate import date_range
    from bpreader.reporting.export import write_report_json
    from bpreader.reporting.review import review_report

    config = load_config(opts.config) if opts.config else DEFAULT_CONFIG
    failure_log = FailureLog(opts.failure_log) if opts.failure_log else None

    print(f"bpreader -- Parsing: {opts.pdf.name}")
    result = ReportExtractor(PdfPageProvider(), config).parse(opts.pdf)

    if isinstance(result, ParseFailure):
        print(f"  FAILED ({result.reason.value}): {result.message}")
        if failure_log is not None:
            log_parse_failure(failure_log, str(opts.pdf), result)
        return 1

    meta = result.metadata
    print(f"  Member:   {meta.member_name} <{meta.email}>")
    print(f"  Period:   {meta.month} {meta.year}")
    print(f"  Pages:    {result.page_count}")
    print(f"  Readings: {len(result.readings)}")
    span = date_range(result.readings)
    if span:
        print(f"  Range:    {span[0].isoformat()} .. {span[1].isoformat()}")
    if meta.summary_stats is None:
        print("  Summary:  not present")

    review = review_report(result)
    counts = {c.label: n for c, n in review.category_counts.items() if n}
    if counts:
        print(f"  Categories: {counts}")
    if review.crisis_count:
        print(f"  Hypertensive Crisis readings: {review.crisis_count}")
    if review.flags:
        print(f"  Implausible values: {len(review.flags)}")
    if result.issues:
        print(f"  Issues:   {len(result.issues)}")

    out_path = opts.out or (_OUTPUT_DIR / f"{opts.pdf.stem}_report.json")
    write_report_json(result, out_path)
    print(f"  JSON:  {out_path}")

    if failure_log is not None:
        written = log_report_issues(failure_log, str(opts.pdf), result)
        print(f"  Log:   {failure_log.path} (+{written})")

    print("Done.")
    return 0


def cmd_classify(args: list) -> int:
    """Classify one systolic/diastolic pair."""
    if len(args) != 2:
        print("Usage: python -m bpreader classify <systolic> <diastolic>")
        return 1
    try:
        systolic, diastolic = int(args[0]), int(args[1])
    except ValueError:
        print("Error: systolic and diastolic must be integers")
        return 1

    from bpreader.classification.bp_categories import classify

    category = classify(systolic, diastolic)
    print(f"{systolic}/{diastolic}: {category.label}")
    print(category.advice)
    return 0


def cmd_help(args: list) -> int:
    """Show help."""
    print("bpreader -- Blood pressure report reader")
    print()
    print("Usage: python -m bpreader <command> [args]")
    print()
    print("Commands:")
    print("  parse <report.pdf>       Extract readings and metadata to JSON")
    print("  classify <sys> <dia>     Show the BP category for one reading")
    print("  help                     Show this help message")
    print()
    print("Examples:")
    print("  python -m bpreader parse March_2024.pdf")
    print("  python -m bpreader parse March_2024.pdf --out march.json --failure-log failures.jsonl")
    print("  python -m bpreader classify 142 88")
    print()
    return 0


_COMMANDS = {
    "parse": cmd_parse,
    "classify": cmd_classify,
    "help": cmd_help,
}


def main() -> int:
    args = sys.argv[1:]
    if not args:
        return cmd_help([])

    command = args[0].lower()
    handler = _COMMANDS.get(command)
    if handler is None:
        print(f"Unknown command: {command}")
        print()
        return cmd_help([])

    return handler(args[1:])


if __name__ == "__main__":
    raise SystemExit(main())
