"""Domain entity for quotes (estimates) sent to clients."""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from uuid import uuid4

from bizdesk.domain.entities.client import Client
from bizdesk.domain.entities.line_item import ProductItem, ServiceItem, items_total
from bizdesk.domain.exceptions import InvalidStatusTransitionError


class QuoteStatus(str, Enum):
    """Lifecycle states of a quote."""

    DRAFT = "draft"
    SENT = "sent"
    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass
class Quote:
    """An estimate of services and products for a client.

    Totals are derived from the line items: ``subtotal`` is the sum of every
    line and ``total`` is ``subtotal - discount``. Call ``recalculate()``
    after changing items or the discount.
    """

    client_id: str
    number: str
    services: list[ServiceItem] = field(default_factory=list)
    products: list[ProductItem] = field(default_factory=list)
    discount: float = 0.0
    subtotal: float = 0.0
    total: float = 0.0
    status: QuoteStatus = QuoteStatus.DRAFT
    valid_until: date = field(default_factory=lambda: date.today() + timedelta(days=30))
    notes: str = ""
    client: Client | None = None
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def recalculate(self) -> None:
        """Refresh subtotal and total from the current items and discount."""
        self.subtotal = items_total(self.services, self.products)
        self.total = round(self.subtotal - self.discount, 2)

    @property
    def item_count(self) -> int:
        return len(self.services) + len(self.products)

    def mark_sent(self) -> None:
        if self.status != QuoteStatus.DRAFT:
            raise InvalidStatusTransitionError("Quote", self.status.value, QuoteStatus.SENT.value)
        self._set_status(QuoteStatus.SENT)

    def mark_approved(self) -> None:
        if self.status == QuoteStatus.APPROVED:
            raise InvalidStatusTransitionError("Quote", self.status.value, QuoteStatus.APPROVED.value)
        self._set_status(QuoteStatus.APPROVED)

    def mark_rejected(self) -> None:
        if self.status not in (QuoteStatus.DRAFT, QuoteStatus.SENT):
            raise InvalidStatusTransitionError("Quote", self.status.value, QuoteStatus.REJECTED.value)
        self._set_status(QuoteStatus.REJECTED)

    def _set_status(self, status: QuoteStatus) -> None:
        self.status = status
        self.updated_at = datetime.now(timezone.utc)
