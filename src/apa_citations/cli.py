"""Command line interface for generating APA citations from CSV data."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import List

from .app import CitationGeneratorApp
from .config import ConfigError, GeneratorConfig
from .exporters import citation_lines, result_to_json, to_csl_json
from .logging import RunLog, setup_logging
from .report import render_report


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate APA 7 citations from a CSV file or a public Google Sheet"
    )
    parser.add_argument("input", nargs="?", type=Path, help="Path to a CSV file of sources")
    parser.add_argument(
        "--sheet-url",
        help="Google Sheets share URL to read instead of a local CSV file",
    )
    parser.add_argument(
        "--style",
        type=Path,
        help="Custom CSL style file (defaults to the published APA 7 style)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Write the input rows plus the citation column as CSV",
    )
    parser.add_argument(
        "--json-output",
        type=Path,
        help="Write the structured generation result to a JSON file",
    )
    parser.add_argument(
        "--csl-json-output",
        type=Path,
        help="Write the normalized CSL-JSON items to a file",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print the run's debug log after the report",
    )
    parser.add_argument("--log-level", help="Override the LOG_LEVEL setting")
    args = parser.parse_args(argv)

    if args.input is None and not args.sheet_url:
        parser.error("provide a CSV file path or --sheet-url")

    try:
        config = GeneratorConfig.from_env()
    except ConfigError as exc:
        parser.error(f"invalid configuration: {exc}")
    setup_logging(args.log_level or config.log_level)

    csv_data = None
    if args.input is not None and not args.sheet_url:
        csv_data = args.input.read_bytes()
    style_data = args.style.read_bytes() if args.style else None

    with CitationGeneratorApp(config=config) as generator:
        result = generator.generate(
            csv_text=csv_data, sheet_url=args.sheet_url, style_text=style_data, log=RunLog()
        )
        csv_output = generator.export_csv(result) if args.output and result.rows else None

    print(render_report(result))
    for line in citation_lines(result):
        print(line)
    if args.debug:
        print("Debug log:")
        for line in result.debug_log:
            print(line)

    if csv_output is not None:
        args.output.write_text(csv_output, encoding="utf-8")

    if args.json_output:
        args.json_output.write_text(result_to_json(result, include_debug=args.debug))

    if args.csl_json_output:
        args.csl_json_output.write_text(to_csl_json(result.items))

    return 0 if result.success else 1


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    raise SystemExit(main())
