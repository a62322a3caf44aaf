import pytest

from fedramp_compare.control_id import ControlID, ControlIDRangeError
from fedramp_compare.models import Baseline, Parameters
from fedramp_compare.parser import classify_header, parse_sheet, read_header_names
from fedramp_compare.sheet import GridSheet, cell_text

HEADER = [
    "SORT ID",
    "ID",
    "Control Name",
    "NIST Control Description\n(From NIST SP 800-53r5)",
    "NIST Discussion",
    "FedRAMP-Defined  Assignment / Selection Parameters",
    None,
    "Additional FedRAMP Requirements and Guidance",
]


def make_sheet(*rows):
    return GridSheet([["FedRAMP High Baseline"], HEADER, *rows])


def test_header_names_are_whitespace_normalized_and_blank_headers_skipped():
    """Header text is collapsed; blank header cells are skipped."""

    headers = read_header_names(make_sheet())

    assert headers[3] == "NIST Control Description (From NIST SP 800-53r5)"
    assert headers[5] == "FedRAMP-Defined Assignment / Selection Parameters"
    assert 6 not in headers


@pytest.mark.parametrize(
    "name, expected",
    [
        ("ID", "id"),
        ("SORT ID", None),
        ("Control Name", "name"),
        ("control name", None),
        ("NIST Control Description (From NIST SP 800-53r5)", "description"),
        ("NIST Discussion (From NIST SP 800-53r5)", "discussion"),
        ("FedRAMP-Defined Assignment / Selection Parameters", "assignment"),
        ("Additional FedRAMP Requirements and Guidance", "additional"),
        ("Family", None),
    ],
)
def test_classify_header(name, expected):
    """Known headers map to record fields."""

    assert classify_header(name) == expected


def test_row_populates_only_its_baseline_slot():
    """A parsed row fills only its own baseline's slot."""

    sheet = make_sheet([1, "AC-2", " Access Enforcement ", " desc ", "disc", " 24 hours ", "ignored", "extra"])

    controls = parse_sheet(sheet, Baseline.HIGH)

    control = controls[ControlID.parse("AC-2")]
    assert not control.id.is_empty()
    assert control.name == "Access Enforcement"
    assert control.description == "desc"
    assert control.discussion == "disc"
    assert control.parameters[Baseline.HIGH] == Parameters("24 hours", "extra")
    assert control.parameters[Baseline.MODERATE] is None
    assert control.parameters[Baseline.LOW] is None
    assert control.present_baselines() == [Baseline.HIGH]


def test_row_without_parameter_text_still_has_empty_slot():
    """A row with no parameter text still marks the control present."""

    controls = parse_sheet(make_sheet([1, "AC-3", "Access", None, None, None, None, None]), Baseline.LOW)

    assert controls[ControlID.parse("AC-3")].parameters[Baseline.LOW] == Parameters()


def test_rows_without_a_valid_id_are_dropped():
    """Rows whose ID cell has no identifier are dropped quietly."""

    sheet = make_sheet(
        [1, None, "No id", "", "", "", None, ""],
        [2, "not an id", "Bad id", "", "", "", None, ""],
        [3, "AC-0", "Zero number", "", "", "", None, ""],
        [4, "AC-1", "Good", "", "", "", None, ""],
    )

    controls = parse_sheet(sheet, Baseline.MODERATE)

    assert [str(cid) for cid in controls.ids()] == ["AC-1"]


def test_duplicate_ids_last_row_wins():
    """The last row with a repeated ID replaces earlier ones."""

    sheet = make_sheet(
        [1, "AC-1", "First", "", "", "one", None, ""],
        [2, "AC-1", "Second", "", "", "two", None, ""],
    )

    control = parse_sheet(sheet, Baseline.HIGH)[ControlID.parse("AC-1")]

    assert control.name == "Second"
    assert control.parameters[Baseline.HIGH].assignment == "two"


def test_non_text_cells_are_ignored_and_numbers_become_text():
    """Numbers become text; booleans and blanks are ignored."""

    sheet = make_sheet([1.0, "AC-4", True, "", "", 12.0, None, 3.5])

    control = parse_sheet(sheet, Baseline.HIGH)[ControlID.parse("AC-4")]

    assert control.name == ""
    assert control.parameters[Baseline.HIGH] == Parameters("12", "3.5")


def test_rows_shorter_than_header_are_fine():
    """Short rows leave trailing fields empty."""

    controls = parse_sheet(make_sheet([1, "AC-5"]), Baseline.HIGH)

    assert ControlID.parse("AC-5") in controls


def test_out_of_range_identifier_propagates():
    """ID range errors abort parsing."""

    with pytest.raises(ControlIDRangeError):
        parse_sheet(make_sheet([1, "AC-999", "Too big", "", "", "", None, ""]), Baseline.HIGH)


def test_custom_header_row():
    """The header row can be moved."""

    sheet = GridSheet([["Title"], ["Subtitle"], ["ID", "Control Name"], ["SC-7", "Boundary Protection"]])

    controls = parse_sheet(sheet, Baseline.LOW, header_row=2)

    assert controls[ControlID.parse("SC-7")].name == "Boundary Protection"


def test_cell_text():
    """Cell values convert to text as expected."""

    assert cell_text("x") == "x"
    assert cell_text(3) == "3"
    assert cell_text(3.0) == "3"
    assert cell_text(None) is None
    assert cell_text(False) is None


def test_grid_sheet_range_reader():
    """Range reads are clipped to the sheet bounds."""

    sheet = GridSheet([["a", "b", "c"], ["d"]])

    assert sheet.width == 3
    assert sheet.height == 2
    assert list(sheet.range((1, 0), (1, 5))) == [(1, 0, "d"), (1, 1, None), (1, 2, None)]
    assert sheet.cell(5, 5) is None
