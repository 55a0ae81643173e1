"""Field Patch — three-state value for partial updates.

Invariants:
    - ABSENT means "leave unchanged"; it is never written to storage
    - present("") is distinct from ABSENT and carries an empty string
    - Instances are immutable
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldPatch:
    """Absent, present-empty, or present with a value."""

    is_present: bool = False
    value: str = ""

    @classmethod
    def present(cls, value: str) -> "FieldPatch":
        return cls(is_present=True, value=value)

    @classmethod
    def from_optional(cls, value: str | None) -> "FieldPatch":
        """None maps to ABSENT; any string (even "") is present."""
        if value is None:
            return ABSENT
        return cls.present(value)

    @property
    def is_empty(self) -> bool:
        """True only for a present value that is the empty string."""
        return self.is_present and self.value == ""


ABSENT = FieldPatch()


def collect_changes(**patches: FieldPatch) -> dict[str, str]:
    """Column -> new value for every present patch. Absent patches are dropped."""
    return {
        name: patch.value
        for name, patch in patches.items()
        if patch.is_present
    }
