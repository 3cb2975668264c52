from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.relationship import engine
from app.schemas.common import SuccessResponse
from app.schemas.subscription import RecipientsRequest, RecipientsResponse, SubscribeRequest

router = APIRouter(prefix="/subscription", tags=["subscription"])


@router.post("", response_model=SuccessResponse, status_code=201)
async def subscribe(
    body: SubscribeRequest,
    db: AsyncSession = Depends(get_db),
):
    await engine.subscribe(db, body.requestor, body.target)
    return SuccessResponse()


@router.post("/recipients", response_model=RecipientsResponse)
async def updatable_recipients(
    body: RecipientsRequest,
    db: AsyncSession = Depends(get_db),
):
    recipients = await engine.get_updatable_recipients(db, body.sender, body.text)
    return RecipientsResponse(recipients=recipients, count=len(recipients))
