import logging
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, InvalidError, StorageFailure
from app.db.models import User
from app.schemas.common import normalize_email

log = logging.getLogger("friends-directory")


async def resolve_by_email(db: AsyncSession, email: str) -> User | None:
    """Look up an account; emails match case-insensitively."""
    try:
        return await db.scalar(select(User).where(User.email == normalize_email(email)))
    except SQLAlchemyError as exc:
        log.exception("Account lookup failed")
        raise StorageFailure("account lookup failed") from exc


async def resolve_many(db: AsyncSession, emails: Iterable[str]) -> list[User]:
    """Resolve every email, failing on the first one with no account.

    Results keep the order of ``emails``.
    """
    users = []
    for email in emails:
        email = normalize_email(email)
        user = await resolve_by_email(db, email)
        if user is None:
            raise InvalidError(f"user not found with email {email}", email=email)
        users.append(user)
    return users


async def create_user(db: AsyncSession, email: str) -> User:
    email = normalize_email(email)
    existing = await resolve_by_email(db, email)
    if existing:
        raise ConflictError(f"user already exists with email {email}")

    user = User(email=email)
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError(f"user already exists with email {email}")
    except SQLAlchemyError as exc:
        await db.rollback()
        log.exception("Account insert failed")
        raise StorageFailure("account insert failed") from exc

    await db.refresh(user)
    log.info("Registered account %s", user.id)
    return user
