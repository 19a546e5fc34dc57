"""Base classes shared by all extracted records.

All data structures use Pydantic v2 for validation, serialization, and type safety.
Records are frozen snapshots: built once per extraction, never mutated.
"""

from enum import Enum
from typing import Self

from pydantic import BaseModel, ConfigDict


class Record(BaseModel):
    """Immutable extracted record.

    Every field has an empty/default value so a degraded page still yields
    a structurally complete record.
    """

    model_config = ConfigDict(frozen=True)

    @classmethod
    def empty(cls) -> Self:
        """Record with every field at its empty/default value."""
        return cls()


class RecordEnum(str, Enum):
    """Closed enumeration with a designated default variant."""

    @classmethod
    def default(cls) -> Self:
        return next(iter(cls))
