"""PeerFeedback ORM — persists one reviewer's scores and comments about a reviewee.

Invariants:
    - Always belongs to a ReviewCycle (cycle_id FK)
    - (cycle_id, reviewer_id, reviewee_id) is unique: one submission per triple
    - Scores stored as five 0–4 integer columns; range enforced in core before insert

Design Decisions:
    - Unique constraint closes the race between duplicate check and insert
    - reviewer_id is stored (needed for the duplicate check) but never selected
      by the aggregation read path's output
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from perf_review.db.base import Base


class PeerFeedback(Base):
    """Peer feedback row."""
    __tablename__ = "peer_feedback"
    __table_args__ = (
        UniqueConstraint(
            "cycle_id", "reviewer_id", "reviewee_id",
            name="uq_peer_feedback_cycle_reviewer_reviewee",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    cycle_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("review_cycles.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    reviewee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    reviewer_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    project_impact: Mapped[int] = mapped_column(Integer, nullable=False)
    direction: Mapped[int] = mapped_column(Integer, nullable=False)
    engineering_excellence: Mapped[int] = mapped_column(Integer, nullable=False)
    operational_ownership: Mapped[int] = mapped_column(Integer, nullable=False)
    people_impact: Mapped[int] = mapped_column(Integer, nullable=False)
    strengths: Mapped[str | None] = mapped_column(Text, nullable=True)
    growth_areas: Mapped[str | None] = mapped_column(Text, nullable=True)
    general_comments: Mapped[str | None] = mapped_column(Text, nullable=True)
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    cycle: Mapped["ReviewCycle"] = relationship(
        "ReviewCycle", back_populates="peer_feedback",
    )
