from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List

import polars as pl

from .models import Baseline, Controls
from .variation import has_distinct_parameters

LOGGER = logging.getLogger(__name__)

SUMMARY_COLUMNS = ["family", "controls", "high", "moderate", "low", "distinct_parameters"]


def _control_records(controls: Controls) -> List[Dict[str, object]]:
    records = []
    for control in controls:
        records.append(
            {
                "family": control.id.family,
                "high": control.parameters[Baseline.HIGH] is not None,
                "moderate": control.parameters[Baseline.MODERATE] is not None,
                "low": control.parameters[Baseline.LOW] is not None,
                "distinct_parameters": has_distinct_parameters(control),
            }
        )
    return records


def summarize_controls(controls: Controls) -> pl.DataFrame:
    """Per-family counts of controls, baseline membership and parameter variations."""

    records = _control_records(controls)
    if not records:
        return pl.DataFrame(schema={"family": pl.Utf8, **{name: pl.UInt32 for name in SUMMARY_COLUMNS[1:]}})

    return (
        pl.DataFrame(records)
        .group_by("family")
        .agg(
            [
                pl.len().alias("controls"),
                pl.col("high").sum(),
                pl.col("moderate").sum(),
                pl.col("low").sum(),
                pl.col("distinct_parameters").sum(),
            ]
        )
        .sort("family")
        .select(SUMMARY_COLUMNS)
    )


def write_summary_csv(frame: pl.DataFrame, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    frame.write_csv(path, include_header=True)
    LOGGER.info("Wrote summary CSV: %s", path)
    return path
