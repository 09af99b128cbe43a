"""Peer Feedback Services — nominations, submissions, feedback requests and anonymized aggregates.

Invariants:
    - submit_peer_feedback re-verifies, in order: cycle exists, peer-feedback deadline
      open, active nomination reviewer->reviewee, no prior submission for
      (reviewer, reviewee, cycle); only then builds PillarScores
    - Cycle status does not gate nominations or submissions; the deadline does
    - Aggregates are computed over a materialized list; the input is never mutated
    - Reviewer identity never appears in an aggregate result or its log lines
    - Read use-cases verify the cycle exists before listing

Design Decisions:
    - Rules live in core/enforce_feedback (pure); this module only loads and saves
    - `now` is injectable on every time-dependent call
    - One ErrorContext per call carries the cycle id into every raised error
"""

import logging
from collections.abc import Sequence
from datetime import datetime

from perf_review.core.aggregate_feedback import AnonymizedPeerFeedback, anonymize_feedback
from perf_review.core.clock import utc_now
from perf_review.core.domain_types import CycleId, UserId
from perf_review.core.enforce_feedback import (
    check_feedback_window,
    check_nominees,
    check_not_already_submitted,
    find_active_nomination,
)
from perf_review.core.errors import ErrorContext, NoFeedbackError
from perf_review.core.peer_feedback import PeerFeedback
from perf_review.core.peer_nomination import (
    FeedbackRequest,
    PeerNomination,
    build_feedback_requests,
)
from perf_review.core.pillar_scores import PillarScores
from perf_review.core.repository_protocols import (
    PeerFeedbackRepository,
    PeerNominationRepository,
    ReviewCycleRepository,
)
from perf_review.services.review_cycles import get_review_cycle

logger = logging.getLogger(__name__)


async def nominate_peers(
    cycles: ReviewCycleRepository,
    nominations: PeerNominationRepository,
    cycle_id: CycleId,
    nominator_id: UserId,
    nominee_ids: Sequence[UserId],
    minimum: int = 3,
    maximum: int = 5,
    now: datetime | None = None,
) -> list[PeerNomination]:
    """Create PENDING nominations for `nominee_ids` to review `nominator_id`."""
    ctx = ErrorContext(cycle_id=str(cycle_id))
    await get_review_cycle(cycles, cycle_id)
    existing = await nominations.find_by_nominator_and_cycle(nominator_id, cycle_id)
    check_nominees(nominator_id, nominee_ids, existing, minimum, maximum, ctx)

    nominated_at = now or utc_now()
    saved = [
        await nominations.save(
            PeerNomination.create(cycle_id, nominator_id, nominee_id, now=nominated_at),
        )
        for nominee_id in nominee_ids
    ]
    logger.info(
        "Peers nominated",
        extra={"cycle_id": str(cycle_id), "nomination_count": len(saved)},
    )
    return saved


async def get_my_nominations(
    cycles: ReviewCycleRepository,
    nominations: PeerNominationRepository,
    cycle_id: CycleId,
    nominator_id: UserId,
) -> list[PeerNomination]:
    """Nominations `nominator_id` made in the cycle, oldest first."""
    await get_review_cycle(cycles, cycle_id)
    return await nominations.find_by_nominator_and_cycle(nominator_id, cycle_id)


async def get_feedback_requests(
    cycles: ReviewCycleRepository,
    nominations: PeerNominationRepository,
    feedback_repo: PeerFeedbackRepository,
    cycle_id: CycleId,
    reviewer_id: UserId,
) -> list[FeedbackRequest]:
    """Nominations naming `reviewer_id`, each flagged once feedback was submitted."""
    await get_review_cycle(cycles, cycle_id)
    requested = await nominations.find_by_nominee_and_cycle(reviewer_id, cycle_id)
    submitted = await feedback_repo.find_by_reviewer_and_cycle(reviewer_id, cycle_id)
    return build_feedback_requests(requested, submitted)


async def submit_peer_feedback(
    cycles: ReviewCycleRepository,
    nominations: PeerNominationRepository,
    feedback_repo: PeerFeedbackRepository,
    cycle_id: CycleId,
    reviewer_id: UserId,
    reviewee_id: UserId,
    scores: dict,
    strengths: str | None = None,
    growth_areas: str | None = None,
    general_comments: str | None = None,
    now: datetime | None = None,
) -> PeerFeedback:
    """Validate the submission workflow, then persist one anonymized PeerFeedback."""
    now = now or utc_now()
    ctx = ErrorContext(cycle_id=str(cycle_id))
    cycle = await get_review_cycle(cycles, cycle_id)
    check_feedback_window(cycle, now)

    reviewee_nominations = await nominations.find_by_nominator_and_cycle(
        reviewee_id, cycle_id,
    )
    find_active_nomination(reviewee_nominations, reviewer_id, ctx)

    prior = await feedback_repo.find_by_reviewer_and_cycle(reviewer_id, cycle_id)
    check_not_already_submitted(prior, reviewee_id, ctx)

    feedback = PeerFeedback.create(
        cycle_id=cycle_id,
        reviewee_id=reviewee_id,
        reviewer_id=reviewer_id,
        scores=PillarScores.from_object(scores),
        strengths=strengths,
        growth_areas=growth_areas,
        general_comments=general_comments,
        submitted_at=now,
    )
    saved = await feedback_repo.save(feedback)
    logger.info(
        "Peer feedback submitted",
        extra={"cycle_id": str(cycle_id), "reviewee_id": str(reviewee_id)},
    )
    return saved


async def get_aggregated_peer_feedback(
    feedback_repo: PeerFeedbackRepository,
    cycle_id: CycleId,
    reviewee_id: UserId,
) -> AnonymizedPeerFeedback:
    """Anonymized aggregate of every submission about `reviewee_id` in the cycle."""
    feedback = await feedback_repo.find_by_reviewee_and_cycle(reviewee_id, cycle_id)
    if not feedback:
        raise NoFeedbackError(ErrorContext(cycle_id=str(cycle_id)))
    aggregated = anonymize_feedback(feedback)
    logger.info(
        "Peer feedback aggregated",
        extra={
            "cycle_id": str(cycle_id),
            "reviewee_id": str(reviewee_id),
            "feedback_count": aggregated.feedback_count,
        },
    )
    return aggregated
