"""Feedback Workflow Enforcement — pure rules checked before nominations and submissions.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Raise a typed PerfReviewError on violation, return normally (or the match) on success
    - The shell loads cycles, nominations and prior feedback; these rules only inspect them
    - Submissions are gated by the peer-feedback deadline alone, whatever the cycle status

Design Decisions:
    - Kept outside PeerFeedback: the entity stays a plain record, the workflow owns
      deadline, nomination and duplicate checks
    - Raise instead of returning error dicts: services propagate straight to the
      FastAPI error handler
    - Callers pass an ErrorContext carrying the cycle id so error responses name it
"""

from collections.abc import Sequence
from datetime import datetime

from perf_review.core.domain_types import PHASE_LABELS, DeadlinePhase, UserId
from perf_review.core.errors import (
    DeadlinePassedError,
    DuplicateFeedbackError,
    ErrorContext,
    InvalidNominationError,
    NominationNotActiveError,
)
from perf_review.core.peer_feedback import PeerFeedback
from perf_review.core.peer_nomination import PeerNomination
from perf_review.core.review_cycle import ReviewCycle


# --- Submission rules ---------------------------------------------------------

def check_feedback_window(cycle: ReviewCycle, now: datetime | None = None) -> None:
    """Peer feedback is accepted until the peer-feedback deadline passes."""
    if cycle.has_deadline_passed(DeadlinePhase.PEER_FEEDBACK, now):
        raise DeadlinePassedError(
            PHASE_LABELS[DeadlinePhase.PEER_FEEDBACK],
            context=ErrorContext(cycle_id=str(cycle.id)),
        )


def find_active_nomination(
    nominations: Sequence[PeerNomination],
    reviewer_id: UserId,
    context: ErrorContext | None = None,
) -> PeerNomination:
    """The reviewee's nominations must include an active one for this reviewer."""
    nomination = next(
        (n for n in nominations if n.nominee_id == reviewer_id), None,
    )
    if nomination is None:
        raise NominationNotActiveError(
            "No peer nomination found for this reviewer and reviewee", context,
        )
    if not nomination.is_active:
        raise NominationNotActiveError("Peer nomination is not active", context)
    return nomination


def check_not_already_submitted(
    reviewer_feedback: Sequence[PeerFeedback],
    reviewee_id: UserId,
    context: ErrorContext | None = None,
) -> None:
    """One submission per (reviewer, reviewee, cycle)."""
    if any(fb.reviewee_id == reviewee_id for fb in reviewer_feedback):
        raise DuplicateFeedbackError(context)


# --- Nomination rules ---------------------------------------------------------

def check_nominees(
    nominator_id: UserId,
    nominee_ids: Sequence[UserId],
    existing: Sequence[PeerNomination],
    minimum: int,
    maximum: int,
    context: ErrorContext | None = None,
) -> None:
    """Nominate between `minimum` and `maximum` distinct peers, never yourself, never twice."""
    if len(nominee_ids) < minimum or len(nominee_ids) > maximum:
        raise InvalidNominationError(
            f"Must nominate between {minimum} and {maximum} peers", context,
        )
    if nominator_id in nominee_ids:
        raise InvalidNominationError(
            "Cannot nominate yourself for peer feedback", context,
        )
    if len(set(nominee_ids)) != len(nominee_ids):
        raise InvalidNominationError("Each peer can only be nominated once", context)

    already = {n.nominee_id for n in existing}
    for nominee_id in nominee_ids:
        if nominee_id in already:
            raise InvalidNominationError(
                f"Already nominated peer with ID {nominee_id}", context,
            )
