"""Line items shared by quotes and orders."""

from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4


@dataclass
class ServiceItem:
    """Billable work, priced per hour."""

    description: str
    hours: float
    hourly_rate: float
    id: str = field(default_factory=lambda: str(uuid4()))

    @property
    def total(self) -> float:
        return round(self.hours * self.hourly_rate, 2)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "hours": self.hours,
            "hourly_rate": self.hourly_rate,
            "total": self.total,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServiceItem":
        return cls(
            id=data.get("id") or str(uuid4()),
            description=data.get("description", ""),
            hours=float(data.get("hours", 0)),
            hourly_rate=float(data.get("hourly_rate", 0)),
        )


@dataclass
class ProductItem:
    """Goods sold by quantity."""

    description: str
    quantity: float
    unit_price: float
    id: str = field(default_factory=lambda: str(uuid4()))

    @property
    def total(self) -> float:
        return round(self.quantity * self.unit_price, 2)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
            "total": self.total,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProductItem":
        return cls(
            id=data.get("id") or str(uuid4()),
            description=data.get("description", ""),
            quantity=float(data.get("quantity", 0)),
            unit_price=float(data.get("unit_price", 0)),
        )


def items_total(services: list[ServiceItem], products: list[ProductItem]) -> float:
    """Sum of every service and product line."""
    return round(sum(s.total for s in services) + sum(p.total for p in products), 2)
