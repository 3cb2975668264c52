from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.schemas.common import SuccessResponse
from app.schemas.user import CreateUserRequest
from app.services.user import create_user

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=SuccessResponse, status_code=201)
async def register_user(
    body: CreateUserRequest,
    db: AsyncSession = Depends(get_db),
):
    await create_user(db, body.email)
    return SuccessResponse()
