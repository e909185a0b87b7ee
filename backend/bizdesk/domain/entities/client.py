"""Domain entity — a registered customer, either a person or a company."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4


class ClientType(str, Enum):
    """Legal nature of a client. Individuals carry a CPF, organizations a CNPJ."""

    INDIVIDUAL = "individual"
    ORGANIZATION = "organization"


@dataclass
class Client:
    """Core domain entity for a customer record."""

    type: ClientType
    name: str
    document: str
    email: str = ""
    phone: str = ""
    address: str = ""
    number: str = ""
    neighborhood: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def document_label(self) -> str:
        return "CPF" if self.type == ClientType.INDIVIDUAL else "CNPJ"

    @property
    def location(self) -> str:
        return f"{self.city or 'N/A'}/{self.state or 'N/A'}"
