from pydantic import BaseModel, EmailStr, field_validator, model_validator

from app.schemas.common import normalize_email


class FriendPairRequest(BaseModel):
    """Body of both the create-friend and the common-friends calls."""

    friends: list[EmailStr]

    @field_validator("friends")
    @classmethod
    def _normalize(cls, v: list[str]) -> list[str]:
        return [normalize_email(e) for e in v]

    @model_validator(mode="after")
    def validate_pair(self):
        if len(self.friends) != 2:
            raise ValueError("friends must contain exactly two emails.")
        if self.friends[0] == self.friends[1]:
            raise ValueError("friends must be two different emails.")
        return self


class EmailRequest(BaseModel):
    email: EmailStr

    @field_validator("email")
    @classmethod
    def _normalize(cls, v: str) -> str:
        return normalize_email(v)


class FriendListResponse(BaseModel):
    success: bool = True
    friends: list[str]
    count: int
