from pathlib import Path

import pandas as pd
import pytest

HEADERS = [
    "SORT ID",
    "Family",
    "ID",
    "Control Name",
    "NIST Control Description\n(From NIST SP 800-53r5 12/10/2020)",
    "NIST Discussion\n(From NIST SP 800-53r5 12/10/2020)",
    "FedRAMP-Defined  Assignment / Selection Parameters",
    "Additional FedRAMP Requirements and Guidance",
]


def baseline_rows(rows):
    """Turn (id, name, description, discussion, assignment, additional) tuples into sheet rows."""

    return [
        [f"{i:03d}", "FAMILY", cid, name, desc, disc, assign, extra]
        for i, (cid, name, desc, disc, assign, extra) in enumerate(rows, start=1)
    ]


def write_workbook(path: Path, tabs) -> Path:
    """Write one sheet per tab name: title row, header row, then data rows."""

    with pd.ExcelWriter(path, engine="xlsxwriter") as writer:
        for sheet_name, rows in tabs.items():
            df = pd.DataFrame(baseline_rows(rows), columns=HEADERS)
            df.to_excel(writer, sheet_name=sheet_name, index=False, startrow=1)
            writer.sheets[sheet_name].write(0, 0, f"FedRAMP {sheet_name} Controls")
    return path


@pytest.fixture
def baseline_workbook(tmp_path):
    tabs = {
        "High Baseline": [
            ("AC-1", "Policy and Procedures", "Develop policy.", "Discuss policy.", "at least annually", ""),
            ("AC-2", "Account Management", "Manage accounts.", "Discuss accounts.", "[Assignment: 24 hours]", "Req 1"),
            ("AC-2 (1)", "Account Management | Automated System Account Management", "Automate.", "", "", ""),
        ],
        "Moderate Baseline": [
            ("AC-1", "Moderate name", "Moderate desc", "", "at least   annually", ""),
            ("AC-2", "Account Management", "Manage accounts.", "Discuss accounts.", "[Assignment: 48 hours]", "Req 1"),
            ("AU-1", "Audit Policy", "Moderate audit text.", "", "annually", ""),
        ],
        "Low Baseline": [
            ("AC-1", "Low name", "Low desc", "", "at least annually", ""),
            ("AU-1", "Audit Policy (Low)", "Low audit text.", "", "annually", ""),
        ],
    }
    return write_workbook(tmp_path / "baselines.xlsx", tabs)
