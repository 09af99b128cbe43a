"""Peer Feedback and Peer Nomination entities — immutable records.

Tests cover:
    - create() stamps id and submitted_at, keeps comments as given
    - is_anonymized is always True
    - Nominations start PENDING; only DECLINED is inactive
    - Feedback requests are flagged once the nominee reviewed the nominator
"""

import dataclasses
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from perf_review.core.domain_types import CycleId, FeedbackId, NominationStatus, UserId
from perf_review.core.peer_feedback import PeerFeedback
from perf_review.core.peer_nomination import PeerNomination, build_feedback_requests
from perf_review.core.pillar_scores import PillarScores

SCORES = PillarScores.create(
    project_impact=1, direction=2, engineering_excellence=3,
    operational_ownership=4, people_impact=0,
)


def _create(**kwargs) -> PeerFeedback:
    return PeerFeedback.create(
        cycle_id=CycleId(uuid4()),
        reviewee_id=UserId(uuid4()),
        reviewer_id=UserId(uuid4()),
        scores=SCORES,
        **kwargs,
    )


def test_create_stamps_id_and_submitted_at():
    before = datetime.now(timezone.utc)
    feedback = _create()
    assert feedback.id is not None
    assert feedback.submitted_at >= before
    assert feedback.submitted_at.tzinfo is not None


def test_create_keeps_supplied_id_and_timestamp():
    fid = FeedbackId(uuid4())
    at = datetime(2026, 1, 2, 3, 4, 5)
    feedback = _create(id=fid, submitted_at=at)
    assert feedback.id == fid
    assert feedback.submitted_at == at.replace(tzinfo=timezone.utc)


def test_comments_default_to_none():
    feedback = _create()
    assert feedback.strengths is None
    assert feedback.growth_areas is None
    assert feedback.general_comments is None


def test_comments_kept_as_given():
    feedback = _create(strengths="Clear writer", growth_areas="", general_comments="Thanks")
    assert feedback.strengths == "Clear writer"
    assert feedback.growth_areas == ""
    assert feedback.general_comments == "Thanks"


def test_feedback_is_always_anonymized():
    assert _create().is_anonymized is True


def test_feedback_is_immutable():
    feedback = _create()
    with pytest.raises(dataclasses.FrozenInstanceError):
        feedback.strengths = "edited"


def test_restore_preserves_fields():
    original = _create(strengths="S")
    restored = PeerFeedback.restore(
        cycle_id=original.cycle_id,
        reviewee_id=original.reviewee_id,
        reviewer_id=original.reviewer_id,
        scores=original.scores,
        strengths=original.strengths,
        id=original.id,
        submitted_at=original.submitted_at,
    )
    assert restored == original


# --- PeerNomination ------------------------------------------------------------

def test_nomination_starts_pending_and_active():
    at = datetime(2026, 2, 1, tzinfo=timezone.utc)
    nomination = PeerNomination.create(
        CycleId(uuid4()), UserId(uuid4()), UserId(uuid4()), now=at,
    )
    assert nomination.status is NominationStatus.PENDING
    assert nomination.is_active
    assert nomination.nominated_at == at


def test_with_status_returns_new_instance():
    nomination = PeerNomination.create(CycleId(uuid4()), UserId(uuid4()), UserId(uuid4()))
    accepted = nomination.with_status(NominationStatus.ACCEPTED)
    declined = nomination.with_status(NominationStatus.DECLINED)
    assert nomination.status is NominationStatus.PENDING
    assert accepted.is_active
    assert not declined.is_active
    assert declined.id == nomination.id


def test_nominated_at_defaults_to_now():
    before = datetime.now(timezone.utc) - timedelta(seconds=1)
    nomination = PeerNomination.create(CycleId(uuid4()), UserId(uuid4()), UserId(uuid4()))
    assert nomination.nominated_at >= before


def test_feedback_requests_flag_answered_nominators():
    cycle, reviewer = CycleId(uuid4()), UserId(uuid4())
    answered, waiting = UserId(uuid4()), UserId(uuid4())
    nominations = [
        PeerNomination.create(cycle, answered, reviewer),
        PeerNomination.create(cycle, waiting, reviewer),
    ]
    given = [PeerFeedback.create(cycle, answered, reviewer, SCORES)]

    requests = build_feedback_requests(nominations, given)

    assert [r.nomination for r in requests] == nominations
    assert [r.feedback_submitted for r in requests] == [True, False]


def test_feedback_requests_empty_without_nominations():
    assert build_feedback_requests([], []) == []
