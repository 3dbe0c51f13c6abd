"""
SkillSwap — ORM model registry.

Importing every model here ensures that Alembic (and any other tool that
inspects ``Base.metadata``) discovers all tables automatically.
"""

from skillswap.models.user import User
from skillswap.models.skill import SkillOffer
from skillswap.models.like import Like
from skillswap.models.history import History

__all__ = [
    "User",
    "SkillOffer",
    "Like",
    "History",
]
