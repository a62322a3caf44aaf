from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Set

from .control_id import ControlID
from .models import Baseline, Control, Controls, Parameters

LOGGER = logging.getLogger(__name__)

# Narrative text comes from the first baseline in this order that has the control.
NARRATIVE_SOURCE_ORDER = (Baseline.HIGH, Baseline.MODERATE, Baseline.LOW)


class MissingHighRecordError(LookupError):
    """Raised in strict mode when a control has no High baseline row."""


def _narrative_source(
    control_id: ControlID,
    baselines: Mapping[Baseline, Controls],
    strict: bool,
) -> Optional[Control]:
    high = baselines[Baseline.HIGH].get(control_id)
    if high is not None:
        return high
    if strict:
        raise MissingHighRecordError(f"{control_id} has no High baseline record")

    for baseline in NARRATIVE_SOURCE_ORDER[1:]:
        fallback = baselines[baseline].get(control_id)
        if fallback is not None:
            LOGGER.warning("%s missing from High baseline; using %s narrative text", control_id, baseline.short)
            return fallback
    return None


def merge_controls(baselines: Mapping[Baseline, Controls], *, strict: bool = False) -> Controls:
    """
    Combine per-baseline controls into one record per identifier.

    Every identifier in the union of the inputs is kept. Name, description and
    discussion are taken from the High record (falling back to Moderate, then
    Low, unless ``strict``). Each baseline's parameter slot is copied from that
    baseline's own record. Baselines absent from ``baselines`` count as empty.
    """

    complete: Dict[Baseline, Controls] = {baseline: baselines.get(baseline) or Controls() for baseline in Baseline}

    all_ids: Set[ControlID] = set()
    for controls in complete.values():
        all_ids.update(controls.ids())

    merged: Dict[ControlID, Control] = {}
    for control_id in all_ids:
        source = _narrative_source(control_id, complete, strict)

        slots: Dict[Baseline, Optional[Parameters]] = {}
        for baseline in Baseline:
            record = complete[baseline].get(control_id)
            slots[baseline] = record.parameters[baseline] if record is not None else None

        merged[control_id] = Control(
            id=control_id,
            name=source.name if source else "",
            description=source.description if source else "",
            discussion=source.discussion if source else "",
            parameters=slots,
        )

    LOGGER.info("Merged %d control(s) across %d baseline(s)", len(merged), sum(1 for c in complete.values() if len(c)))
    return Controls(merged)
