"""Domain entities for the states and cities offered in address and report forms."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4


@dataclass
class State:
    """A federative unit, identified by its two-letter UF code."""

    name: str
    code: str
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class City:
    """A city belonging to one state. ``state`` is attached on reads."""

    name: str
    state_id: str
    state: State | None = None
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
