#!/usr/bin/env python3
"""FedRAMP baseline controls comparison.

Reads the FedRAMP security controls baseline workbook (High, Moderate and Low
tabs), merges the three baselines into one record per control and writes a
comparison report in which baseline-specific parameter text only gets its own
rows when it actually differs.

Usage
-----
    fedramp-compare report --source FedRAMP_Security_Controls_Baseline.xlsx
    fedramp-compare report --config fedramp_compare.yaml --xlsx reports/controls.xlsx
    fedramp-compare summary --csv reports/summary.csv
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import requests
from openpyxl.utils.exceptions import InvalidFileException

from .config import AppConfig, ConfigError, load_config
from .excel_report import write_excel_report
from .html_report import write_html_report
from .layout import comparison_views
from .models import Controls
from .summary import summarize_controls, write_summary_csv
from .workbook import fetch_workbook, load_controls

LOGGER = logging.getLogger(__name__)


def _is_url(value: str) -> bool:
    return value.startswith(("http://", "https://"))


def load_configured_controls(config: AppConfig, source_override: Optional[str] = None) -> Controls:
    if source_override:
        if _is_url(source_override):
            source = fetch_workbook(source_override, timeout=config.source.timeout)
        else:
            source = Path(source_override)
    elif config.source.path is not None:
        source = config.source.path
    else:
        source = fetch_workbook(config.source.url, timeout=config.source.timeout)

    return load_controls(source, sheet_names=config.sheet_names, header_row=config.header_row)


def cmd_report(args: argparse.Namespace, config: AppConfig) -> None:
    controls = load_configured_controls(config, args.source)
    views = comparison_views(controls)

    html_path = args.output or config.report.html_path
    write_html_report(
        views,
        html_path,
        title=config.report.title,
        stylesheet=config.report.stylesheet,
    )

    xlsx_path = args.xlsx or config.report.xlsx_path
    if xlsx_path:
        write_excel_report(views, xlsx_path)


def cmd_summary(args: argparse.Namespace, config: AppConfig) -> None:
    controls = load_configured_controls(config, args.source)
    summary = summarize_controls(controls)
    if summary.height == 0:
        LOGGER.info("No controls found.")
    else:
        LOGGER.info("Summary:\n%s", summary)

    csv_path = args.csv or config.report.summary_path
    if csv_path:
        write_summary_csv(summary, csv_path)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compare FedRAMP High/Moderate/Low baseline controls",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML config (default: $FEDRAMP_COMPARE_CONFIG or built-in defaults)",
    )
    parser.add_argument(
        "--source",
        help="Workbook path or URL (overrides the configured source).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    subparsers = parser.add_subparsers(dest="command")

    report = subparsers.add_parser(
        "report",
        help="Write the HTML comparison report (and optionally an Excel workbook).",
    )
    report.add_argument(
        "--output",
        type=Path,
        help="HTML output path (default: report.html_path from config).",
    )
    report.add_argument(
        "--xlsx",
        type=Path,
        help="Optional Excel output path.",
    )
    report.set_defaults(func=cmd_report)

    summary = subparsers.add_parser(
        "summary",
        help="Print per-family control counts and parameter variations.",
    )
    summary.add_argument(
        "--csv",
        type=Path,
        help="Optional CSV path for the summary table.",
    )
    summary.set_defaults(func=cmd_summary)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "func", None):
        parser.print_help()
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    try:
        config = load_config(args.config)
        args.func(args, config)
    except ConfigError as exc:
        LOGGER.error("Config error: %s", exc)
        return 1
    except requests.RequestException as exc:
        LOGGER.error("Could not download baselines workbook: %s", exc)
        return 1
    except (FileNotFoundError, InvalidFileException) as exc:
        LOGGER.error("Could not open baselines workbook: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
