"""PeerNomination ORM — a reviewee's request for feedback from a peer.

Invariants:
    - Always belongs to a ReviewCycle (cycle_id FK)
    - (cycle_id, nominator_id, nominee_id) is unique
    - status is one of NominationStatus values
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from perf_review.db.base import Base


class PeerNomination(Base):
    """Peer nomination row."""
    __tablename__ = "peer_nominations"
    __table_args__ = (
        UniqueConstraint(
            "cycle_id", "nominator_id", "nominee_id",
            name="uq_peer_nominations_cycle_nominator_nominee",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    cycle_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("review_cycles.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    nominator_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    nominee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="PENDING",
    )
    nominated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    cycle: Mapped["ReviewCycle"] = relationship(
        "ReviewCycle", back_populates="nominations",
    )
