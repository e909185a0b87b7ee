"""SQLAlchemy ORM model for the Order entity."""

from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, DateTime, Float, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bizdesk.infrastructure.database.base import Base
from bizdesk.infrastructure.database.models.client import ClientModel


class OrderModel(Base):
    """ORM model — maps to the 'orders' table."""

    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    number: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    client_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("clients.id"), nullable=False, index=True
    )
    quote_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("quotes.id", ondelete="SET NULL"), nullable=True
    )
    is_from_quote: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    services: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    products: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    total: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending", index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    client: Mapped[ClientModel] = relationship(lazy="selectin")

    def __repr__(self) -> str:
        return f"<OrderModel(id={self.id}, number='{self.number}', status='{self.status}')>"
