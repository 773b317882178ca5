"""
CRUD operations for database models.

Exports base CRUD class and the vote session CRUD with a
pre-instantiated singleton for direct use.

Usage:
    from weekly_vote.boundary.db.CRUD import vote_session_crud

    sessions = await vote_session_crud.get_active(db)
"""

from weekly_vote.boundary.db.CRUD.base_crud import BaseCRUD
from weekly_vote.boundary.db.CRUD.vote_session_crud import VoteSessionCRUD, vote_session_crud

__all__ = [
    "BaseCRUD",
    "VoteSessionCRUD",
    "vote_session_crud",
]
