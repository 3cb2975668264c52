from pydantic import BaseModel


class SuccessResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    details: dict | None = None


def normalize_email(value: str) -> str:
    return value.strip().lower()
