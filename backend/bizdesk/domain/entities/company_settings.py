"""Singleton entity holding the issuing company's identity, printed on every document."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4


@dataclass
class CompanySettings:
    company_name: str
    tax_id: str = ""
    address: str = ""
    neighborhood: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    phone: str = ""
    whatsapp: str = ""
    email: str = ""
    logo: str | None = None  # base64 payload or data URI
    id: str = field(default_factory=lambda: str(uuid4()))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class Counters:
    """Next sequence numbers for quotes and orders."""

    quote: int = 1
    order: int = 1
