"""Change events emitted when lead rows are modified."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

EVENT_INSERT = "INSERT"
EVENT_UPDATE = "UPDATE"
EVENT_DELETE = "DELETE"


@dataclass(frozen=True)
class LeadChangeEvent:
    """Row snapshots taken before and after a change to ``table``."""

    table: str
    event: str
    old: dict[str, Any] = field(default_factory=dict)
    new: dict[str, Any] = field(default_factory=dict)


__all__ = ["EVENT_DELETE", "EVENT_INSERT", "EVENT_UPDATE", "LeadChangeEvent"]
