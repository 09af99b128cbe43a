"""ReviewCycle ORM — persists the review cycle aggregate and its five deadlines.

Invariants:
    - id is UUID primary key
    - status is one of CycleStatus values (DRAFT, ACTIVE, CALIBRATION, COMPLETED)
    - end_date is NULL until the cycle completes

Design Decisions:
    - Deadlines flattened into five columns: CycleDeadlines is owned by exactly one cycle
    - status as String, not DB enum: transitions are enforced in core, not the schema
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from perf_review.db.base import Base


class ReviewCycle(Base):
    """Review cycle row — owns nominations and peer feedback."""
    __tablename__ = "review_cycles"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="DRAFT", index=True,
    )
    self_review_deadline: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    peer_feedback_deadline: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    manager_evaluation_deadline: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    calibration_deadline: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    feedback_delivery_deadline: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    start_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    end_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    nominations: Mapped[list["PeerNomination"]] = relationship(
        "PeerNomination", back_populates="cycle",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    peer_feedback: Mapped[list["PeerFeedback"]] = relationship(
        "PeerFeedback", back_populates="cycle",
        cascade="all, delete-orphan", passive_deletes=True,
    )
