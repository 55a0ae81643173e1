"""Domain Types — identity aliases and the closed set of pipeline operations.

Invariants:
    - UserId wraps str (UUID text), never reassigned after creation
    - OperationKind enumerates every controller; adding one requires a new request type
"""

from enum import Enum
from typing import NewType


UserId = NewType("UserId", str)


class OperationKind(str, Enum):
    """Pipeline operations: one typed request and one controller per member."""
    CREATE = "create"
    GET = "get"
    GET_ALL = "get_all"
    UPDATE = "update"
    DELETE = "delete"
