"""
Relationship graph between accounts.

- repo.py: the relationship store (edge existence, inserts, traversal queries)
- engine.py: the business rules for friendships, subscriptions, blocks and
  update fan-out, built on the store and the user directory

Routers call the engine; nothing outside this package issues SQL against
the relationships table.
"""

from .engine import (
    block,
    create_friend,
    get_common_friends,
    get_friends,
    get_updatable_recipients,
    subscribe,
)
from .repo import DirectionPolicy

__all__ = [
    "create_friend",
    "get_friends",
    "get_common_friends",
    "subscribe",
    "block",
    "get_updatable_recipients",
    "DirectionPolicy",
]
