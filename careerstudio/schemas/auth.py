"""Authentication schema definitions."""

from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field, field_validator

MIN_PASSWORD_LENGTH = 8


class Credentials(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        # Accounts are looked up by the lower-cased address
        return v.lower()


class RegisterRequest(Credentials):
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)


class RecruiterRead(BaseModel):
    id: str
    email: str


class AuthResponse(BaseModel):
    message: str
    token: str
    recruiter: RecruiterRead
