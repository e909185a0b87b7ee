"""Pydantic DTOs (Data Transfer Objects) for the Client feature."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from bizdesk.domain.entities import ClientType
from bizdesk.domain.validators import only_digits


class ClientCreate(BaseModel):
    """Schema for registering a new client."""

    type: ClientType = Field(..., examples=["individual"])
    name: str = Field(..., min_length=1, max_length=200, examples=["Maria da Silva"])
    document: str = Field(..., min_length=11, max_length=18, examples=["529.982.247-25"])
    email: str | None = Field(None, max_length=255)
    phone: str = Field("", max_length=20)
    address: str = Field("", max_length=200)
    number: str = Field("", max_length=20)
    neighborhood: str = Field("", max_length=100)
    city: str = Field("", max_length=100)
    state: str = Field("", max_length=2, examples=["SP"])
    zip_code: str = Field("", max_length=9)

    @field_validator("document", "zip_code", "phone")
    @classmethod
    def _digits(cls, value: str) -> str:
        return only_digits(value)

    @field_validator("state")
    @classmethod
    def _upper_state(cls, value: str) -> str:
        return value.upper()

    @field_validator("email")
    @classmethod
    def _lower_email(cls, value: str | None) -> str | None:
        return value.strip().lower() if value else None


class ClientUpdate(BaseModel):
    """Schema for updating an existing client — all fields optional."""

    type: ClientType | None = None
    name: str | None = Field(None, min_length=1, max_length=200)
    document: str | None = Field(None, min_length=11, max_length=18)
    email: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=20)
    address: str | None = Field(None, max_length=200)
    number: str | None = Field(None, max_length=20)
    neighborhood: str | None = Field(None, max_length=100)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=2)
    zip_code: str | None = Field(None, max_length=9)

    @field_validator("document", "zip_code", "phone")
    @classmethod
    def _digits(cls, value: str | None) -> str | None:
        return only_digits(value) if value is not None else None

    @field_validator("state")
    @classmethod
    def _upper_state(cls, value: str | None) -> str | None:
        return value.upper() if value is not None else None

    @field_validator("email")
    @classmethod
    def _lower_email(cls, value: str | None) -> str | None:
        return value.strip().lower() if value else None


class ClientResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    type: ClientType
    name: str
    document: str
    email: str
    phone: str
    address: str
    number: str
    neighborhood: str
    city: str
    state: str
    zip_code: str
    created_at: datetime

    model_config = {"from_attributes": True}
