from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.relationship import engine
from app.schemas.common import SuccessResponse
from app.schemas.friend import EmailRequest, FriendListResponse, FriendPairRequest

router = APIRouter(prefix="/friends", tags=["friends"])


@router.post("", response_model=SuccessResponse, status_code=201)
async def create_friend(
    body: FriendPairRequest,
    db: AsyncSession = Depends(get_db),
):
    await engine.create_friend(db, body.friends)
    return SuccessResponse()


@router.post("/list", response_model=FriendListResponse)
async def list_friends(
    body: EmailRequest,
    db: AsyncSession = Depends(get_db),
):
    friends = await engine.get_friends(db, body.email)
    return FriendListResponse(friends=friends, count=len(friends))


@router.post("/common-list", response_model=FriendListResponse)
async def list_common_friends(
    body: FriendPairRequest,
    db: AsyncSession = Depends(get_db),
):
    friends = await engine.get_common_friends(db, body.friends)
    return FriendListResponse(friends=friends, count=len(friends))
