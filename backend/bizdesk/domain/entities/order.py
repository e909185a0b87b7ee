"""Domain entity for orders — work committed for a client."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from bizdesk.domain.entities.client import Client
from bizdesk.domain.entities.line_item import ProductItem, ServiceItem
from bizdesk.domain.exceptions import InvalidStatusTransitionError


class OrderStatus(str, Enum):
    """Lifecycle states of an order."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


_TERMINAL = frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED})


@dataclass
class Order:
    """An order, either created by approving a quote or entered manually."""

    client_id: str
    number: str
    services: list[ServiceItem] = field(default_factory=list)
    products: list[ProductItem] = field(default_factory=list)
    total: float = 0.0
    status: OrderStatus = OrderStatus.PENDING
    quote_id: str | None = None
    is_from_quote: bool = False
    client: Client | None = None
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: datetime | None = None

    @property
    def item_count(self) -> int:
        return len(self.services) + len(self.products)

    @property
    def reference_date(self) -> datetime:
        """Date used by reports: completion date when known, creation date otherwise."""
        return self.completed_at or self.created_at

    def transition_to(self, status: OrderStatus) -> None:
        """Move to ``status``. Completed and cancelled orders are final."""
        if status == self.status:
            return
        if self.status in _TERMINAL:
            raise InvalidStatusTransitionError("Order", self.status.value, status.value)
        self.status = status
        if status == OrderStatus.COMPLETED:
            self.completed_at = datetime.now(timezone.utc)
        else:
            self.completed_at = None
