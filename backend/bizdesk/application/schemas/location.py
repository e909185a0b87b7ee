"""Pydantic DTOs for states and cities."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class StateCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, examples=["Paraná"])
    code: str = Field(..., min_length=2, max_length=2, pattern=r"^[A-Za-z]{2}$", examples=["PR"])

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("code")
    @classmethod
    def _upper_code(cls, value: str) -> str:
        return value.upper()


class StateUpdate(BaseModel):
    """All fields optional."""

    name: str | None = Field(None, min_length=1, max_length=100)
    code: str | None = Field(None, min_length=2, max_length=2, pattern=r"^[A-Za-z]{2}$")

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("code")
    @classmethod
    def _upper_code(cls, value: str | None) -> str | None:
        return value.upper() if value is not None else None


class StateResponse(BaseModel):
    id: str
    name: str
    code: str
    created_at: datetime

    model_config = {"from_attributes": True}


class CityCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, examples=["Curitiba"])
    state_id: str = Field(..., min_length=1)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class CityUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    state_id: str | None = Field(None, min_length=1)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class CityResponse(BaseModel):
    id: str
    name: str
    state_id: str
    state: StateResponse | None = None
    created_at: datetime

    model_config = {"from_attributes": True}
