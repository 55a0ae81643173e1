"""User Entity — transient domain copy of a stored user.

Invariants:
    - id is empty only before the repository persists the user
    - created_at is set once, at construction, and is the default sort key (desc)
    - first_name and last_name are non-empty for any persisted user
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class User:
    """Domain user. Frozen; updates go through the repository, not mutation."""
    first_name: str
    last_name: str
    email: str = ""
    phone: str = ""
    id: str = ""
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime | None = None
