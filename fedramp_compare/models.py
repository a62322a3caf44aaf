from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional

from .control_id import ControlID

WHITESPACE_RUN = re.compile(r"\s+")


class Baseline(Enum):
    """The three FedRAMP impact levels, in display order."""

    HIGH = ("High Baseline", "High")
    MODERATE = ("Moderate Baseline", "Moderate")
    LOW = ("Low Baseline", "Low")

    def __init__(self, sheet_name: str, short: str) -> None:
        self.sheet_name = sheet_name
        self.short = short

    @classmethod
    def parse(cls, text: str) -> "Baseline":
        """Accept a short label or a sheet name, case-insensitive."""

        lowered = str(text).strip().lower()
        for baseline in cls:
            if lowered in (baseline.short.lower(), baseline.sheet_name.lower(), baseline.name.lower()):
                return baseline
        raise ValueError(f"Unknown baseline: {text!r}")


def collapse_whitespace(text: str) -> str:
    return WHITESPACE_RUN.sub(" ", text)


@dataclass(frozen=True, order=True)
class Parameters:
    """Assignment/selection text and additional guidance for one baseline."""

    assignment: str = ""
    additional: str = ""

    def flatten(self) -> "Parameters":
        """Whitespace-collapsed copy; for comparison only, never for display."""

        return Parameters(
            assignment=collapse_whitespace(self.assignment).strip(),
            additional=collapse_whitespace(self.additional).strip(),
        )

    def equivalent(self, other: Optional["Parameters"]) -> bool:
        return self.flatten() == (other or Parameters()).flatten()


def _empty_slots() -> Dict[Baseline, Optional[Parameters]]:
    return {baseline: None for baseline in Baseline}


@dataclass(frozen=True)
class Control:
    id: ControlID = field(default_factory=ControlID)
    name: str = ""
    description: str = ""
    discussion: str = ""
    parameters: Mapping[Baseline, Optional[Parameters]] = field(default_factory=_empty_slots, hash=False)

    def __post_init__(self) -> None:
        slots = _empty_slots()
        for key, value in self.parameters.items():
            if not isinstance(key, Baseline):
                raise ValueError(f"Parameter slot key must be a Baseline, got {key!r}")
            slots[key] = value
        # Read-only view: a record never changes once built.
        object.__setattr__(self, "parameters", MappingProxyType(slots))

    def present_baselines(self) -> List[Baseline]:
        return [baseline for baseline in Baseline if self.parameters[baseline] is not None]

    def without_baseline(self, baseline: Baseline) -> "Control":
        slots = dict(self.parameters)
        slots[baseline] = None
        return replace(self, parameters=slots)


class Controls:
    """Controls keyed by identifier; iteration is always in identifier order."""

    def __init__(self, controls: Mapping[ControlID, Control] | Iterable[Control] | None = None) -> None:
        if controls is None:
            self._controls: Dict[ControlID, Control] = {}
        elif isinstance(controls, Mapping):
            self._controls = dict(controls)
        else:
            self._controls = {control.id: control for control in controls}

    def __getitem__(self, control_id: ControlID) -> Control:
        return self._controls[control_id]

    def __contains__(self, control_id: object) -> bool:
        return control_id in self._controls

    def __len__(self) -> int:
        return len(self._controls)

    def __iter__(self) -> Iterator[Control]:
        for control_id in self.ids():
            yield self._controls[control_id]

    def __repr__(self) -> str:
        return f"Controls({len(self)} controls)"

    def get(self, control_id: ControlID, default: Optional[Control] = None) -> Optional[Control]:
        return self._controls.get(control_id, default)

    def ids(self) -> List[ControlID]:
        return sorted(self._controls)

    def without_baseline(self, baseline: Baseline) -> "Controls":
        """Copy with one baseline's parameter slot cleared on every control."""

        return Controls({cid: control.without_baseline(baseline) for cid, control in self._controls.items()})
