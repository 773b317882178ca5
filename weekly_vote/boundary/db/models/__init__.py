"""
Database models package.

Exports:
  - VoteSessionModel: Weekly polling window
  - VoteModel: Member availability answer (read model)
  - UserModel: Member projection (id, name)

Dependencies: sqlalchemy, weekly_vote.boundary.db.base
System role: Database model definitions for domain entities
"""

from weekly_vote.boundary.db.models.user_model import UserModel
from weekly_vote.boundary.db.models.vote_session_model import VoteSessionModel
from weekly_vote.boundary.db.models.vote_model import VoteModel

__all__ = [
    "UserModel",
    "VoteModel",
    "VoteSessionModel",
]
