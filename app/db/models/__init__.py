"""
SQLAlchemy database models.

- base: Base declarative class
- user: Account model
- relationship: Friend / Block / Subscribe edges

Import any model from this module:
    from app.db.models import User, Relationship, RelationshipType
"""

# Base class (must be imported first)
from .base import Base

# Account models
from .user import User

# Edge models
from .relationship import Relationship, RelationshipType, canonical_pair

# Export all models
__all__ = [
    "Base",
    "User",
    "Relationship",
    "RelationshipType",
    "canonical_pair",
]
