"""SQLAlchemy ORM models for the company settings singleton and document counters."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bizdesk.infrastructure.database.base import Base


class CompanySettingsModel(Base):
    """ORM model — maps to the 'company_settings' table (at most one row)."""

    __tablename__ = "company_settings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    company_name: Mapped[str] = mapped_column(String(255), nullable=False)
    tax_id: Mapped[str] = mapped_column(String(14), nullable=False, default="")
    address: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    neighborhood: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    city: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    state: Mapped[str] = mapped_column(String(2), nullable=False, default="")
    zip_code: Mapped[str] = mapped_column(String(8), nullable=False, default="")
    phone: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    whatsapp: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    email: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    logo: Mapped[str | None] = mapped_column(Text, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<CompanySettingsModel(id={self.id}, company='{self.company_name}')>"


class CounterModel(Base):
    """ORM model — maps to the 'counters' table, a single row with id 1."""

    __tablename__ = "counters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    quote_counter: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    order_counter: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    def __repr__(self) -> str:
        return f"<CounterModel(quote={self.quote_counter}, order={self.order_counter})>"
