"""User Filters — substring criteria shared by count and list.

Invariants:
    - Frozen: one value per list/count request, never mutated
    - Empty string disables the filter for that field
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserFilters:
    """Case-insensitive `contains` matchers on first and last name."""
    first_name: str = ""
    last_name: str = ""

    def active(self) -> dict[str, str]:
        """Field name -> needle, for filters that are switched on."""
        return {
            name: needle
            for name, needle in (
                ("first_name", self.first_name),
                ("last_name", self.last_name),
            )
            if needle
        }
