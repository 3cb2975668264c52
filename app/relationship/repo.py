import enum
import logging
from contextlib import contextmanager

from sqlalchemy import case, exists, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, StorageFailure
from app.db.models import Relationship, RelationshipType, User, canonical_pair

log = logging.getLogger("friends-store")


class DirectionPolicy(str, enum.Enum):
    EITHER = "either"    # (a, b) or (b, a)
    FORWARD = "forward"  # (a, b) only


@contextmanager
def _storage(operation: str):
    try:
        yield
    except SQLAlchemyError as exc:
        log.exception("Relationship store %s failed", operation)
        raise StorageFailure(f"relationship store {operation} failed") from exc


def _friend_ids(account_id: str):
    """Ids connected to ``account_id`` by a Friend edge, whichever side it was stored on."""
    return select(
        case(
            (Relationship.pair_low == account_id, Relationship.pair_high),
            else_=Relationship.pair_low,
        )
    ).where(
        Relationship.relationship_type == RelationshipType.FRIEND,
        or_(
            Relationship.pair_low == account_id,
            Relationship.pair_high == account_id,
        ),
    )


async def edge_exists(
    db: AsyncSession,
    kind: RelationshipType,
    a: str,
    b: str,
    policy: DirectionPolicy = DirectionPolicy.EITHER,
) -> bool:
    if kind is RelationshipType.FRIEND or policy is DirectionPolicy.EITHER:
        low, high = canonical_pair(a, b)
        pair = (Relationship.pair_low == low, Relationship.pair_high == high)
    else:
        pair = (Relationship.requestor_id == a, Relationship.target_id == b)

    stmt = select(exists().where(Relationship.relationship_type == kind, *pair))
    with _storage("existence check"):
        return bool(await db.scalar(stmt))


async def lock_accounts(db: AsyncSession, *account_ids: str) -> None:
    """Take row locks on the given accounts for the rest of the transaction.

    Locks are taken in id order. SQLite ignores ``FOR UPDATE``.
    """
    stmt = (
        select(User.id)
        .where(User.id.in_(sorted(set(account_ids))))
        .order_by(User.id)
        .with_for_update()
    )
    with _storage("account lock"):
        await db.execute(stmt)


async def insert_edge(
    db: AsyncSession,
    kind: RelationshipType,
    from_id: str,
    to_id: str,
    *,
    conflict_message: str,
) -> Relationship:
    """Append an edge and commit.

    A violation of the canonical-pair unique index means another caller
    inserted the same edge first; it surfaces as ``ConflictError``.
    """
    low, high = canonical_pair(from_id, to_id)
    edge = Relationship(
        requestor_id=from_id,
        target_id=to_id,
        relationship_type=kind,
        pair_low=low,
        pair_high=high,
    )
    db.add(edge)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError(conflict_message, kind=kind.value)
    except SQLAlchemyError as exc:
        await db.rollback()
        log.exception("Relationship store insert failed")
        raise StorageFailure("relationship store insert failed") from exc
    return edge


async def friends_of(db: AsyncSession, account_id: str) -> set[str]:
    with _storage("friend lookup"):
        rows = await db.scalars(_friend_ids(account_id))
        return set(rows)


async def friend_emails(db: AsyncSession, account_id: str) -> list[str]:
    stmt = (
        select(User.email)
        .where(User.id.in_(_friend_ids(account_id)))
        .order_by(User.email)
    )
    with _storage("friend lookup"):
        return list(await db.scalars(stmt))


async def common_friend_emails(db: AsyncSession, a: str, b: str) -> list[str]:
    shared = await friends_of(db, a) & await friends_of(db, b)
    if not shared:
        return []

    stmt = select(User.email).where(User.id.in_(shared)).order_by(User.email)
    with _storage("common friend lookup"):
        return list(await db.scalars(stmt))


async def candidate_recipient_emails(db: AsyncSession, sender_id: str) -> list[str]:
    """Friends and subscribers of the sender, minus accounts the sender blocked.

    One statement, so all three clauses read the same snapshot.
    """
    subscribers = select(Relationship.requestor_id).where(
        Relationship.relationship_type == RelationshipType.SUBSCRIBE,
        Relationship.target_id == sender_id,
    )
    blocked = select(Relationship.target_id).where(
        Relationship.relationship_type == RelationshipType.BLOCK,
        Relationship.requestor_id == sender_id,
    )
    stmt = (
        select(User.email)
        .where(
            or_(
                User.id.in_(_friend_ids(sender_id)),
                User.id.in_(subscribers),
            ),
            User.id.not_in(blocked),
            User.id != sender_id,
        )
        .order_by(User.email)
    )
    with _storage("recipient lookup"):
        return list(await db.scalars(stmt))
