"""Peer Nomination — a reviewee's request for feedback from a specific peer.

Invariants:
    - nominator_id is the reviewee; nominee_id is the reviewer who may give feedback
    - Only PENDING and ACCEPTED nominations permit a feedback submission
    - Immutable; status changes produce a new instance
    - A feedback request is answered once the nominee submitted feedback about the nominator
"""

import uuid
from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import datetime

from perf_review.core.clock import as_utc, utc_now
from perf_review.core.domain_types import (
    CycleId, NominationId, NominationStatus, UserId,
)
from perf_review.core.peer_feedback import PeerFeedback


@dataclass(frozen=True)
class PeerNomination:
    id: NominationId
    cycle_id: CycleId
    nominator_id: UserId
    nominee_id: UserId
    status: NominationStatus
    nominated_at: datetime

    @classmethod
    def create(
        cls,
        cycle_id: CycleId,
        nominator_id: UserId,
        nominee_id: UserId,
        now: datetime | None = None,
        id: NominationId | None = None,
    ) -> "PeerNomination":
        """New nomination in PENDING status."""
        return cls(
            id=id or NominationId(uuid.uuid4()),
            cycle_id=cycle_id,
            nominator_id=nominator_id,
            nominee_id=nominee_id,
            status=NominationStatus.PENDING,
            nominated_at=as_utc(now) if now else utc_now(),
        )

    def with_status(self, status: NominationStatus) -> "PeerNomination":
        return replace(self, status=status)

    @property
    def is_active(self) -> bool:
        match self.status:
            case NominationStatus.PENDING | NominationStatus.ACCEPTED:
                return True
            case NominationStatus.DECLINED:
                return False


@dataclass(frozen=True)
class FeedbackRequest:
    """A nomination seen from the nominee's side: who asked, and whether they answered."""
    nomination: PeerNomination
    feedback_submitted: bool


def build_feedback_requests(
    nominations: Sequence[PeerNomination],
    reviewer_feedback: Sequence[PeerFeedback],
) -> list[FeedbackRequest]:
    """Pair each nomination of the reviewer with whether feedback to its nominator exists."""
    answered = {fb.reviewee_id for fb in reviewer_feedback}
    return [
        FeedbackRequest(n, n.nominator_id in answered) for n in nominations
    ]
