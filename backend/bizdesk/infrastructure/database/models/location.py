"""SQLAlchemy ORM models for states and cities."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bizdesk.infrastructure.database.base import Base


class StateModel(Base):
    """ORM model — maps to the 'states' table."""

    __tablename__ = "states"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    code: Mapped[str] = mapped_column(String(2), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<StateModel(id={self.id}, code='{self.code}')>"


class CityModel(Base):
    """ORM model — maps to the 'cities' table. A name is unique within its state."""

    __tablename__ = "cities"
    __table_args__ = (UniqueConstraint("state_id", "name", name="uq_cities_state_name"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    state_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("states.id"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    state: Mapped[StateModel] = relationship(lazy="selectin")

    def __repr__(self) -> str:
        return f"<CityModel(id={self.id}, name='{self.name}')>"
