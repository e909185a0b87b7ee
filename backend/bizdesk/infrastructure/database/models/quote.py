"""SQLAlchemy ORM model for the Quote entity."""

from datetime import date, datetime, timezone

from sqlalchemy import JSON, Date, DateTime, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bizdesk.infrastructure.database.base import Base
from bizdesk.infrastructure.database.models.client import ClientModel


class QuoteModel(Base):
    """ORM model — maps to the 'quotes' table.

    Line items are stored as JSON lists of plain dicts.
    """

    __tablename__ = "quotes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    number: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    client_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("clients.id"), nullable=False, index=True
    )
    services: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    products: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    discount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    subtotal: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    total: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="draft", index=True)
    valid_until: Mapped[date] = mapped_column(Date, nullable=False)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    client: Mapped[ClientModel] = relationship(lazy="selectin")

    def __repr__(self) -> str:
        return f"<QuoteModel(id={self.id}, number='{self.number}', status='{self.status}')>"
