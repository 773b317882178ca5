"""
Vote ORM model.

A member's availability answer for one vote session. Casting and editing
votes belong to the voting feature; this module only maps the table so the
active session can be read together with its votes.

Dependencies: sqlalchemy, weekly_vote.boundary.db.base
System role: Read model for votes attached to a session
"""

from sqlalchemy import JSON, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from weekly_vote.boundary.db.base import Base, IntegerIDMixin, TimestampMixin


class VoteModel(Base, IntegerIDMixin, TimestampMixin):
    """
    Vote ORM model.

    Attributes:
        id: Integer primary key
        user_id: Voting member
        vote_session_id: Session the vote belongs to
        selected_days: Day codes the member is available on
    """

    __tablename__ = "votes"

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    vote_session_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("vote_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    selected_days: Mapped[list] = mapped_column(
        JSON,
        nullable=False,
        default=list,
    )

    vote_session = relationship("VoteSessionModel", back_populates="votes")
    user = relationship("UserModel")
