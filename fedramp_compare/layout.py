"""
Table layout for the controls comparison.

Layout happens in two passes. ``build_groups`` turns merged controls into a
layout-agnostic tree: one group per control with its shared attributes and,
when the baselines' parameters really differ, one variant per baseline.
``flatten_groups`` then turns that tree into physical rows with rowspans.
Renderers (HTML, Excel) only ever see the flattened ``Table``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .models import Baseline, Control, Controls, Parameters
from .variation import has_distinct_parameters

TICK = "✓"
NAME_SEPARATOR = " | "

HEADER_LABELS: Tuple[str, ...] = (
    "ID",
    "H",
    "M",
    "L",
    "Name",
    "Description",
    "Discussion",
    "Level",
    "Assignment",
    "Additional guidance",
)


@dataclass(frozen=True)
class Cell:
    text: str = ""
    rowspan: Optional[int] = None
    css_class: Optional[str] = None
    header: bool = False


@dataclass(frozen=True)
class Row:
    cells: Tuple[Cell, ...] = ()
    css_class: Optional[str] = None


@dataclass(frozen=True)
class Table:
    header: Row
    rows: Tuple[Row, ...]


@dataclass(frozen=True)
class ParameterVariant:
    baseline: Baseline
    parameters: Optional[Parameters]


@dataclass(frozen=True)
class ControlGroup:
    """One control's rows before any rowspan arithmetic."""

    control_id: str
    presence: Tuple[bool, ...]
    name: str
    description: str
    discussion: str
    parameters: Optional[Parameters] = None
    variants: Tuple[ParameterVariant, ...] = field(default_factory=tuple)

    @property
    def has_variants(self) -> bool:
        return bool(self.variants)


def display_name(name: str) -> str:
    return name.replace(NAME_SEPARATOR, "\n")


def shared_parameters(control: Control) -> Parameters:
    """First populated slot in baseline order, or empty parameters."""

    for baseline in Baseline:
        params = control.parameters[baseline]
        if params is not None:
            return params
    return Parameters()


def build_group(control: Control) -> ControlGroup:
    distinct = has_distinct_parameters(control)
    return ControlGroup(
        control_id=str(control.id),
        presence=tuple(control.parameters[baseline] is not None for baseline in Baseline),
        name=display_name(control.name),
        description=control.description,
        discussion=control.discussion,
        parameters=None if distinct else shared_parameters(control),
        variants=tuple(ParameterVariant(b, control.parameters[b]) for b in Baseline) if distinct else (),
    )


def build_groups(controls: Controls) -> List[ControlGroup]:
    return [build_group(control) for control in controls]


def _group_rows(group: ControlGroup) -> List[Row]:
    rowspan = 1 + len(Baseline) if group.has_variants else 1

    def shared(text: str) -> Cell:
        return Cell(text=text, rowspan=rowspan)

    cells = [shared(group.control_id)]
    cells.extend(shared(TICK if present else "") for present in group.presence)
    cells.extend([shared(group.name), shared(group.description), shared(group.discussion)])

    if not group.has_variants:
        params = group.parameters or Parameters()
        cells.extend([shared(""), shared(params.assignment), shared(params.additional)])
        return [Row(cells=tuple(cells), css_class="shared")]

    rows = [Row(cells=tuple(cells), css_class="shared")]
    for variant in group.variants:
        css_class = f"parameters {variant.baseline.short}"
        if variant.parameters is None:
            # Placeholder keeps the shared cells' rowspan consistent.
            rows.append(Row(cells=(), css_class=css_class))
            continue
        rows.append(
            Row(
                cells=(
                    Cell(variant.baseline.short),
                    Cell(variant.parameters.assignment),
                    Cell(variant.parameters.additional),
                ),
                css_class=css_class,
            )
        )
    return rows


def flatten_groups(groups: List[ControlGroup]) -> List[Row]:
    rows: List[Row] = []
    for group in groups:
        rows.extend(_group_rows(group))
    return rows


def header_row() -> Row:
    return Row(cells=tuple(Cell(label, header=True) for label in HEADER_LABELS))


def tabulate_controls(controls: Controls) -> Table:
    """Ordered rows for every control, ready for a renderer."""

    return Table(header=header_row(), rows=tuple(flatten_groups(build_groups(controls))))


@dataclass(frozen=True)
class ComparisonView:
    name: str
    title: str
    controls: Controls

    def table(self) -> Table:
        return tabulate_controls(self.controls)


def comparison_views(controls: Controls) -> List[ComparisonView]:
    """All controls, then High-Moderate (Low cleared), then Moderate-Low (High cleared)."""

    return [
        ComparisonView("all", "All controls", controls),
        ComparisonView("high-moderate", "High-Moderate", controls.without_baseline(Baseline.LOW)),
        ComparisonView("moderate-low", "Moderate-Low", controls.without_baseline(Baseline.HIGH)),
    ]
