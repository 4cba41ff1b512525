"""Stored document value object."""
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class StoredDocument:
    """A document body together with the store's revision stamp."""
    id: str
    data: Dict[str, Any] = field(default_factory=dict)
    revision: int = 1
