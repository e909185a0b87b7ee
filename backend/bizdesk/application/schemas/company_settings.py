"""Pydantic DTOs for the company settings singleton."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from bizdesk.domain.validators import only_digits


class CompanySettingsUpdate(BaseModel):
    """Full replacement of the company settings."""

    company_name: str = Field(..., min_length=1, max_length=200)
    tax_id: str = Field("", max_length=18)
    address: str = Field("", max_length=200)
    neighborhood: str = Field("", max_length=100)
    city: str = Field("", max_length=100)
    state: str = Field("", max_length=2)
    zip_code: str = Field("", max_length=9)
    phone: str = Field("", max_length=20)
    whatsapp: str = Field("", max_length=20)
    email: str = Field("", max_length=255)
    logo: str | None = Field(None, description="Base64 image or data URI")

    @field_validator("tax_id", "zip_code")
    @classmethod
    def _digits(cls, value: str) -> str:
        return only_digits(value)


class CompanySettingsResponse(BaseModel):
    id: str
    company_name: str
    tax_id: str
    address: str
    neighborhood: str
    city: str
    state: str
    zip_code: str
    phone: str
    whatsapp: str
    email: str
    logo: str | None
    updated_at: datetime

    model_config = {"from_attributes": True}
