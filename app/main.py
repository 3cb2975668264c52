import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.exceptions import FriendsError, StorageFailure
from app.schemas.common import ErrorResponse
from app.api.user import router as user_router
from app.api.friend import router as friend_router
from app.api.subscription import router as subscription_router
from app.api.block import router as block_router

from .api import health_router

log = logging.getLogger("friends")
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

app = FastAPI(title="Friends Management")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StorageFailure)
async def storage_failure_handler(request: Request, exc: StorageFailure):
    log.error("Storage failure on %s %s: %s", request.method, request.url.path, exc.message)
    body = ErrorResponse(message="Internal Server Error")
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(exclude_none=True))


@app.exception_handler(FriendsError)
async def friends_error_handler(request: Request, exc: FriendsError):
    body = ErrorResponse(message=exc.message, details=exc.details)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(exclude_none=True))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        msg = err.get("msg", "invalid value")
        messages.append(f"{loc}: {msg}" if loc else msg)
    body = ErrorResponse(message="Invalid request payload: " + "; ".join(messages))
    return JSONResponse(status_code=400, content=body.model_dump(exclude_none=True))


app.include_router(user_router, prefix=settings.API_PREFIX)
app.include_router(friend_router, prefix=settings.API_PREFIX)
app.include_router(subscription_router, prefix=settings.API_PREFIX)
app.include_router(block_router, prefix=settings.API_PREFIX)
app.include_router(health_router.router)
