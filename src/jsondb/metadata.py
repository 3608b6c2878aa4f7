"""Database metadata record, stored as ``.metadata/metadata.json``."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


def _now() -> datetime:
    """Timezone-aware local time."""
    return datetime.now().astimezone()


@dataclass
class Metadata:
    """Name and timestamps of a database."""

    name: str
    created: datetime
    modified: datetime

    @classmethod
    def new(cls, name: str) -> Metadata:
        """Fresh record; creation and modification dates are equal."""
        now = _now()
        return cls(name=name, created=now, modified=now)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Metadata:
        return cls(
            name=d["name"],
            created=datetime.fromisoformat(d["created"]),
            modified=datetime.fromisoformat(d["modified"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "created": self.created.isoformat(),
            "modified": self.modified.isoformat(),
        }

    def touch(self) -> None:
        """Advance the modification date to now."""
        self.modified = _now()
