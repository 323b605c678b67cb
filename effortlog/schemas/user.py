"""Pydantic schemas describing user payloads for the API."""

from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    surname: str
    name: str
    patronymic: Optional[str] = None
    address: Optional[str] = None
    passport_number: str


class UserCreate(BaseModel):
    passport_number: str = Field(
        validation_alias=AliasChoices("passport_number", "passportNumber"),
    )


class UserFields(BaseModel):
    """Optional user columns, used both as listing filters and as update values.

    Empty strings count as "not supplied".
    """

    surname: Optional[str] = None
    name: Optional[str] = None
    patronymic: Optional[str] = None
    passport_number: Optional[str] = None
    address: Optional[str] = None

    def supplied(self) -> dict[str, str]:
        return {key: value for key, value in self.model_dump().items() if value}


class PassportRecord(BaseModel):
    """Identity fields returned by the passport-info service."""

    model_config = ConfigDict(extra="ignore")

    surname: str
    name: str
    patronymic: Optional[str] = None
    address: str
