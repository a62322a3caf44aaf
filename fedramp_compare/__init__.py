"""
FedRAMP baseline controls comparison: parse the High/Moderate/Low baseline
tabs, merge them per control and lay out a comparison table.
"""

from .control_id import (  # noqa: F401
    ControlID,
    ControlIDParseError,
    ControlIDRangeError,
)

from .models import (  # noqa: F401
    Baseline,
    Control,
    Controls,
    Parameters,
)

from .sheet import GridSheet, Sheet, cell_text  # noqa: F401
from .parser import parse_sheet  # noqa: F401
from .merge import MissingHighRecordError, merge_controls  # noqa: F401
from .variation import distinct_parameter_sets, has_distinct_parameters  # noqa: F401

from .layout import (  # noqa: F401
    Cell,
    ComparisonView,
    ControlGroup,
    Row,
    Table,
    build_groups,
    comparison_views,
    flatten_groups,
    tabulate_controls,
)

from .workbook import (  # noqa: F401
    MissingBaselineTabError,
    fetch_workbook,
    load_controls,
    read_baselines,
)

__all__ = [
    "ControlID",
    "ControlIDParseError",
    "ControlIDRangeError",
    "Baseline",
    "Control",
    "Controls",
    "Parameters",
    "GridSheet",
    "Sheet",
    "cell_text",
    "parse_sheet",
    "MissingHighRecordError",
    "merge_controls",
    "distinct_parameter_sets",
    "has_distinct_parameters",
    "Cell",
    "ComparisonView",
    "ControlGroup",
    "Row",
    "Table",
    "build_groups",
    "comparison_views",
    "flatten_groups",
    "tabulate_controls",
    "MissingBaselineTabError",
    "fetch_workbook",
    "load_controls",
    "read_baselines",
]
