from pydantic import BaseModel, EmailStr, field_validator

from app.schemas.common import normalize_email


class CreateUserRequest(BaseModel):
    email: EmailStr

    @field_validator("email")
    @classmethod
    def _normalize(cls, v: str) -> str:
        return normalize_email(v)
