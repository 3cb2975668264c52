import logging
from typing import NoReturn, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, InvalidError, NotFoundError
from app.db.models import RelationshipType
from app.relationship import repo
from app.services.user import resolve_by_email, resolve_many
from app.utils.mentions import extract_mentions

log = logging.getLogger("friends-engine")


async def _resolve_one(db: AsyncSession, email: str, role: str) -> tuple[str, str]:
    user = await resolve_by_email(db, email)
    if user is None:
        raise NotFoundError(f"{role} not found with email {email}", email=email)
    return user.id, user.email


async def _resolve_pair(db: AsyncSession, emails: Sequence[str]) -> tuple[tuple[str, str], tuple[str, str]]:
    if len(emails) != 2:
        raise InvalidError("exactly two emails are required")
    a, b = await resolve_many(db, emails)
    # plain values; the ORM rows expire if the transaction is rolled back
    return (a.id, a.email), (b.id, b.email)


async def _refuse(db: AsyncSession, message: str, kind: RelationshipType) -> NoReturn:
    # release the row locks taken for the check before surfacing the conflict
    await db.rollback()
    log.info("Refused %s edge: %s", kind.value, message)
    raise ConflictError(message, kind=kind.value)


async def create_friend(db: AsyncSession, emails: Sequence[str]) -> None:
    """Make two accounts friends.

    Refused when they are already friends, or when either one has blocked
    the other.
    """
    (a_id, a_email), (b_id, b_email) = await _resolve_pair(db, emails)
    await repo.lock_accounts(db, a_id, b_id)

    if await repo.edge_exists(db, RelationshipType.FRIEND, a_id, b_id):
        await _refuse(
            db,
            f"friendship already exists between {a_email} and {b_email}",
            RelationshipType.FRIEND,
        )

    if await repo.edge_exists(db, RelationshipType.BLOCK, a_id, b_id):
        await _refuse(
            db,
            f"blocking exists between {a_email} and {b_email}",
            RelationshipType.BLOCK,
        )

    await repo.insert_edge(
        db,
        RelationshipType.FRIEND,
        a_id,
        b_id,
        conflict_message=f"friendship already exists between {a_email} and {b_email}",
    )
    log.info("Created friendship %s <-> %s", a_id, b_id)


async def get_friends(db: AsyncSession, email: str) -> list[str]:
    account_id, _ = await _resolve_one(db, email, "user")
    return await repo.friend_emails(db, account_id)


async def get_common_friends(db: AsyncSession, emails: Sequence[str]) -> list[str]:
    """Friends shared by both accounts.

    The caller guarantees the two emails differ.
    """
    (a_id, _), (b_id, _) = await _resolve_pair(db, emails)
    return await repo.common_friend_emails(db, a_id, b_id)


async def subscribe(db: AsyncSession, requestor: str, target: str) -> None:
    """``requestor`` starts receiving ``target``'s updates."""
    (r_id, r_email), (t_id, t_email) = await _resolve_pair(db, [requestor, target])
    await repo.lock_accounts(db, r_id, t_id)

    # checked in both directions, same as blocks
    if await repo.edge_exists(db, RelationshipType.SUBSCRIBE, r_id, t_id):
        await _refuse(
            db,
            f"subscription already exists between {r_email} and {t_email}",
            RelationshipType.SUBSCRIBE,
        )

    await repo.insert_edge(
        db,
        RelationshipType.SUBSCRIBE,
        r_id,
        t_id,
        conflict_message=f"subscription already exists between {r_email} and {t_email}",
    )
    log.info("Created subscription %s -> %s", r_id, t_id)


async def block(db: AsyncSession, requestor: str, target: str) -> None:
    """``requestor`` stops sending updates to ``target``."""
    (r_id, r_email), (t_id, t_email) = await _resolve_pair(db, [requestor, target])
    await repo.lock_accounts(db, r_id, t_id)

    if await repo.edge_exists(db, RelationshipType.BLOCK, r_id, t_id):
        await _refuse(
            db,
            f"blocking already exists between {r_email} and {t_email}",
            RelationshipType.BLOCK,
        )

    await repo.insert_edge(
        db,
        RelationshipType.BLOCK,
        r_id,
        t_id,
        conflict_message=f"blocking already exists between {r_email} and {t_email}",
    )
    log.info("Created block %s -> %s", r_id, t_id)


async def get_updatable_recipients(db: AsyncSession, sender: str, text: str) -> list[str]:
    """Every email that should receive an update posted by ``sender``.

    That is the sender's friends and subscribers, minus anyone the sender
    has blocked, plus every account mentioned in ``text``. Mentions are
    added even when the sender blocked them. A mention without an account
    fails the whole call.
    """
    sender_id, _ = await _resolve_one(db, sender, "sender")

    mentions = extract_mentions(text)
    mentioned = [user.email for user in await resolve_many(db, mentions)]

    recipients = await repo.candidate_recipient_emails(db, sender_id)
    seen = set(recipients)
    for email in mentioned:
        if email not in seen:
            seen.add(email)
            recipients.append(email)

    log.info(
        "Resolved %d recipients for %s (%d mentioned)",
        len(recipients),
        sender_id,
        len(mentioned),
    )
    return recipients
