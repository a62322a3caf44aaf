from __future__ import annotations

import re
from dataclasses import dataclass

CONTROL_ID_PATTERN = re.compile(r"(?P<subject>\w+)-(?P<number>\d+)(?:\s+\((?P<subnumber>\d+)\))?")
MAX_COMPONENT = 255


class ControlIDParseError(ValueError):
    """Raised when text does not contain a control identifier."""


class ControlIDRangeError(ValueError):
    """Raised when a numeric component does not fit in 0-255."""


def _component(text: str | None, label: str) -> int:
    if text is None:
        return 0
    value = int(text)
    if value > MAX_COMPONENT:
        raise ControlIDRangeError(f"Control {label} {value} exceeds {MAX_COMPONENT}")
    return value


@dataclass(frozen=True, order=True)
class ControlID:
    """
    Structured control identifier such as ``AC-2`` or ``AC-2 (1)``.

    Ordering is lexicographic over (subject, number, subnumber), so enhancements
    sort directly after their base control. A subnumber of 0 means "no
    enhancement".
    """

    subject: str = ""
    number: int = 0
    subnumber: int = 0

    @classmethod
    def parse(cls, text: str) -> "ControlID":
        """
        Extract the first identifier found anywhere in ``text``.

        Raises ControlIDParseError when nothing matches and ControlIDRangeError
        when a number is out of range.
        """

        match = CONTROL_ID_PATTERN.search(str(text))
        if match is None:
            raise ControlIDParseError(f"No control identifier in {text!r}")
        return cls(
            subject=match.group("subject"),
            number=_component(match.group("number"), "number"),
            subnumber=_component(match.group("subnumber"), "subnumber"),
        )

    def is_empty(self) -> bool:
        return not self.subject or self.number == 0

    @property
    def family(self) -> str:
        return self.subject

    def __str__(self) -> str:
        if self.subnumber > 0:
            return f"{self.subject}-{self.number} ({self.subnumber})"
        return f"{self.subject}-{self.number}"
