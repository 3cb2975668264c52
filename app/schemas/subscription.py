from pydantic import BaseModel, EmailStr, field_validator, model_validator

from app.schemas.common import normalize_email


class RequestorTargetRequest(BaseModel):
    """Directed request: ``requestor`` acts on ``target``."""

    requestor: EmailStr
    target: EmailStr

    @field_validator("requestor", "target")
    @classmethod
    def _normalize(cls, v: str) -> str:
        return normalize_email(v)

    @model_validator(mode="after")
    def validate_distinct(self):
        if self.requestor == self.target:
            raise ValueError("requestor and target must be different emails.")
        return self


class SubscribeRequest(RequestorTargetRequest):
    pass


class RecipientsRequest(BaseModel):
    sender: EmailStr
    text: str

    @field_validator("sender")
    @classmethod
    def _normalize(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("text")
    @classmethod
    def _require_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("text cannot be empty.")
        return v


class RecipientsResponse(BaseModel):
    success: bool = True
    recipients: list[str]
    count: int
