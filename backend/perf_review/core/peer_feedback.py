"""Peer Feedback — one anonymized submission from a reviewer about a reviewee.

Invariants:
    - Immutable after creation; resubmission means a new instance
    - submitted_at is stamped at creation (or restored from storage), always UTC
    - is_anonymized is always True: a property of the type, not a flag
    - No reviewer != reviewee, nomination or deadline checks here (see enforce_feedback)

Design Decisions:
    - Frozen dataclass: no entity-level edit operation exists
    - Comments are `str | None`; empty strings are kept as given, aggregation skips them
"""

import uuid
from dataclasses import dataclass
from datetime import datetime

from perf_review.core.clock import as_utc, utc_now
from perf_review.core.domain_types import CycleId, FeedbackId, UserId
from perf_review.core.pillar_scores import PillarScores


@dataclass(frozen=True)
class PeerFeedback:
    """Peer feedback entity. Reviewer identity never leaves via aggregation."""
    id: FeedbackId
    cycle_id: CycleId
    reviewee_id: UserId
    reviewer_id: UserId
    scores: PillarScores
    submitted_at: datetime
    strengths: str | None = None
    growth_areas: str | None = None
    general_comments: str | None = None

    @classmethod
    def create(
        cls,
        cycle_id: CycleId,
        reviewee_id: UserId,
        reviewer_id: UserId,
        scores: PillarScores,
        strengths: str | None = None,
        growth_areas: str | None = None,
        general_comments: str | None = None,
        id: FeedbackId | None = None,
        submitted_at: datetime | None = None,
    ) -> "PeerFeedback":
        return cls(
            id=id or FeedbackId(uuid.uuid4()),
            cycle_id=cycle_id,
            reviewee_id=reviewee_id,
            reviewer_id=reviewer_id,
            scores=scores,
            submitted_at=as_utc(submitted_at) if submitted_at else utc_now(),
            strengths=strengths,
            growth_areas=growth_areas,
            general_comments=general_comments,
        )

    # Persisted rows carry their original timestamp
    restore = create

    @property
    def is_anonymized(self) -> bool:
        return True
