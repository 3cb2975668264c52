"""Relation edges between accounts."""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import String, ForeignKey, DateTime, Enum, Index
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class RelationshipType(str, enum.Enum):
    FRIEND = "Friend"
    BLOCK = "Block"
    SUBSCRIBE = "Subscribe"


def canonical_pair(a: str, b: str) -> tuple[str, str]:
    """Order-independent key for the pair (a, b)."""
    return (a, b) if a <= b else (b, a)


class Relationship(Base):
    """One append-only edge of kind Friend, Block or Subscribe.

    ``requestor_id -> target_id`` is the direction the edge was requested in.
    ``pair_low``/``pair_high`` hold the canonical pair and carry the unique
    index, so at most one edge of a kind exists per unordered pair.
    """
    
    __tablename__ = "relationships"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))

    requestor_id: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False)
    target_id: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False)
    relationship_type: Mapped[RelationshipType] = mapped_column(
        Enum(
            RelationshipType,
            name="relationship_type",
            values_callable=lambda kinds: [k.value for k in kinds],
        ),
        nullable=False,
    )

    pair_low: Mapped[str] = mapped_column(String, nullable=False)
    pair_high: Mapped[str] = mapped_column(String, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("ux_relationships_type_pair", "relationship_type", "pair_low", "pair_high", unique=True),
        Index("ix_relationships_requestor_id", "requestor_id"),
        Index("ix_relationships_target_id", "target_id"),
    )
