from __future__ import annotations

import logging
from typing import Dict, Optional

from .control_id import ControlID, ControlIDParseError
from .models import Baseline, Control, Controls, Parameters, collapse_whitespace
from .sheet import Sheet, cell_text

LOGGER = logging.getLogger(__name__)

# Zero-based: title row, then the header row, then data.
DEFAULT_HEADER_ROW = 1

ID_HEADER = "ID"
NAME_HEADER = "Control Name"
DESCRIPTION_PREFIX = "NIST Control Description"
DISCUSSION_PREFIX = "NIST Discussion"
ASSIGNMENT_MARKER = "Assignment / Selection"
ADDITIONAL_MARKER = "Additional"


def read_header_names(sheet: Sheet, header_row: int = DEFAULT_HEADER_ROW) -> Dict[int, str]:
    """Map column index -> whitespace-collapsed header text; blank headers are skipped."""

    headers: Dict[int, str] = {}
    for _, col, value in sheet.range((header_row, 0), (header_row, sheet.width)):
        text = cell_text(value)
        if text is None:
            continue
        headers[col] = collapse_whitespace(text)
    return headers


def classify_header(name: str) -> Optional[str]:
    """Return the record field a header feeds, or None when it is not used."""

    if name == ID_HEADER:
        return "id"
    if name == NAME_HEADER:
        return "name"
    if name.startswith(DESCRIPTION_PREFIX):
        return "description"
    if name.startswith(DISCUSSION_PREFIX):
        return "discussion"
    if ASSIGNMENT_MARKER in name:
        return "assignment"
    if ADDITIONAL_MARKER in name:
        return "additional"
    return None


def parse_sheet(sheet: Sheet, baseline: Baseline, *, header_row: int = DEFAULT_HEADER_ROW) -> Controls:
    """
    Parse one baseline tab into controls keyed by identifier.

    Only ``baseline``'s parameter slot is populated (possibly with empty text).
    Rows without a usable ID are dropped; a later row with the same ID replaces
    an earlier one. Unknown columns and non-text cells are ignored.
    """

    fields_by_col = {}
    for col, name in read_header_names(sheet, header_row).items():
        field_name = classify_header(name)
        if field_name is not None:
            fields_by_col[col] = field_name

    controls: Dict[ControlID, Control] = {}
    dropped = 0
    for row_index, row in enumerate(sheet.rows()):
        if row_index <= header_row:
            continue

        values = {"id": ControlID(), "name": "", "description": "", "discussion": "", "assignment": "", "additional": ""}
        for col, value in enumerate(row):
            field_name = fields_by_col.get(col)
            if field_name is None:
                continue
            text = cell_text(value)
            if text is None:
                continue
            if field_name == "id":
                try:
                    values["id"] = ControlID.parse(text)
                except ControlIDParseError:
                    pass
            else:
                values[field_name] = text.strip()

        control_id = values["id"]
        if control_id.is_empty():
            dropped += 1
            continue

        controls[control_id] = Control(
            id=control_id,
            name=values["name"],
            description=values["description"],
            discussion=values["discussion"],
            parameters={baseline: Parameters(values["assignment"], values["additional"])},
        )

    LOGGER.debug(
        "Parsed %d control(s) from %s sheet (%d row(s) without an ID)",
        len(controls),
        baseline.short,
        dropped,
    )
    return Controls(controls)
