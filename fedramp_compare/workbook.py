from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import Any, BinaryIO, Dict, Mapping, Optional, Union

import openpyxl
import requests

from .merge import merge_controls
from .models import Baseline, Controls
from .parser import DEFAULT_HEADER_ROW, parse_sheet
from .sheet import GridSheet

LOGGER = logging.getLogger(__name__)

DEFAULT_BASELINE_URL = (
    "https://www.fedramp.gov/assets/resources/documents/FedRAMP_Security_Controls_Baseline.xlsx"
)
DEFAULT_TIMEOUT = 60

WorkbookSource = Union[str, Path, bytes, bytearray, BinaryIO]


class MissingBaselineTabError(KeyError):
    """Raised when the workbook has no tab for a baseline."""


def fetch_workbook(url: str = DEFAULT_BASELINE_URL, *, timeout: float = DEFAULT_TIMEOUT) -> bytes:
    """Download the baselines workbook and return its raw bytes."""

    LOGGER.info("Downloading %s", url)
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    LOGGER.info("Downloaded %d bytes", len(response.content))
    return response.content


def open_workbook(source: WorkbookSource) -> Any:
    """Open a workbook from a path, raw bytes or a binary stream."""

    if isinstance(source, (bytes, bytearray)):
        source = BytesIO(source)
    elif isinstance(source, BytesIO):
        source.seek(0)
    elif isinstance(source, str):
        source = Path(source)
    if isinstance(source, Path) and not source.exists():
        raise FileNotFoundError(f"Workbook not found: {source}")
    return openpyxl.load_workbook(source, read_only=True, data_only=True)


def baseline_sheet(
    workbook: Any,
    baseline: Baseline,
    sheet_names: Optional[Mapping[Baseline, str]] = None,
) -> GridSheet:
    name = (sheet_names or {}).get(baseline, baseline.sheet_name)
    if name not in workbook.sheetnames:
        raise MissingBaselineTabError(f"Workbook has no '{name}' tab")
    return GridSheet.from_worksheet(workbook[name])


def read_baselines(
    source: WorkbookSource,
    *,
    sheet_names: Optional[Mapping[Baseline, str]] = None,
    header_row: int = DEFAULT_HEADER_ROW,
) -> Dict[Baseline, Controls]:
    """
    Parse every baseline tab of the workbook.

    A missing tab is reported and yields an empty ``Controls`` for that baseline
    so that merging still sees all three keys.
    """

    workbook = open_workbook(source)
    baselines: Dict[Baseline, Controls] = {}
    try:
        for baseline in Baseline:
            try:
                sheet = baseline_sheet(workbook, baseline, sheet_names)
            except MissingBaselineTabError as exc:
                LOGGER.warning("Skipping %s baseline: %s", baseline.short, exc.args[0])
                baselines[baseline] = Controls()
                continue
            baselines[baseline] = parse_sheet(sheet, baseline, header_row=header_row)
            LOGGER.info("%s baseline: %d control(s)", baseline.short, len(baselines[baseline]))
    finally:
        workbook.close()
    return baselines


def load_controls(
    source: WorkbookSource,
    *,
    sheet_names: Optional[Mapping[Baseline, str]] = None,
    header_row: int = DEFAULT_HEADER_ROW,
    strict: bool = False,
) -> Controls:
    """Read all baselines from ``source`` and merge them."""

    return merge_controls(read_baselines(source, sheet_names=sheet_names, header_row=header_row), strict=strict)
