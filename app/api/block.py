from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.relationship import engine
from app.schemas.block import BlockRequest
from app.schemas.common import SuccessResponse

router = APIRouter(prefix="/block", tags=["block"])


@router.post("", response_model=SuccessResponse, status_code=201)
async def block_updates(
    body: BlockRequest,
    db: AsyncSession = Depends(get_db),
):
    await engine.block(db, body.requestor, body.target)
    return SuccessResponse()
