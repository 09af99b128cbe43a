"""Peer Feedback Aggregation — rounded averages and anonymized comment digests.

Tests cover:
    - Per-pillar averages round half up (2.5 -> 3, 3.5 -> 4)
    - Single feedback aggregates to its own scores
    - Averages are order-independent and stay within 0..4
    - Empty or None input raises NoFeedbackError
    - Comments keep submission order, skip None/"" and never carry reviewer identity
    - Flattened comments are strengths, then growthAreas, then general
"""

import itertools
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from perf_review.core.aggregate_feedback import (
    PeerFeedbackAggregationService,
    aggregate_feedback,
    aggregate_peer_scores,
    anonymize_feedback,
    collect_comments,
    flatten_comments,
    round_half_up,
)
from perf_review.core.domain_types import PILLARS, CommentTag, CycleId, UserId
from perf_review.core.errors import NoFeedbackError
from perf_review.core.peer_feedback import PeerFeedback
from perf_review.core.pillar_scores import PillarScores

CYCLE = CycleId(uuid4())
REVIEWEE = UserId(uuid4())
BASE = datetime(2026, 4, 1, tzinfo=timezone.utc)


def _scores(pi=2, d=2, ee=2, oo=2, ppl=2) -> PillarScores:
    return PillarScores.create(
        project_impact=pi, direction=d, engineering_excellence=ee,
        operational_ownership=oo, people_impact=ppl,
    )


def _feedback(scores=None, offset=0, **comments) -> PeerFeedback:
    return PeerFeedback.create(
        cycle_id=CYCLE,
        reviewee_id=REVIEWEE,
        reviewer_id=UserId(uuid4()),
        scores=scores or _scores(),
        submitted_at=BASE + timedelta(minutes=offset),
        **comments,
    )


# --- round_half_up -------------------------------------------------------------

@pytest.mark.parametrize(
    "value, expected",
    [(0.0, 0), (0.49, 0), (0.5, 1), (1.5, 2), (2.5, 3), (3.5, 4), (3.49, 3), (4.0, 4)],
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


# --- aggregate_peer_scores -----------------------------------------------------

def test_single_feedback_aggregates_to_itself():
    scores = _scores(4, 3, 2, 1, 0)
    assert aggregate_peer_scores([_feedback(scores)]).equals(scores)


def test_two_feedbacks_round_half_up():
    result = aggregate_peer_scores([
        _feedback(_scores(3, 2, 4, 1, 0)),
        _feedback(_scores(4, 3, 4, 2, 1)),
    ])
    assert result.to_object() == {
        "projectImpact": 4,          # 3.5
        "direction": 3,              # 2.5
        "engineeringExcellence": 4,  # 4.0
        "operationalOwnership": 2,   # 1.5
        "peopleImpact": 1,           # 0.5
    }


def test_three_feedbacks_round_to_nearest():
    result = aggregate_peer_scores([
        _feedback(_scores(1, 0, 4, 4, 2)),
        _feedback(_scores(1, 0, 3, 4, 2)),
        _feedback(_scores(2, 1, 3, 3, 3)),
    ])
    # 4/3=1.33, 1/3=0.33, 10/3=3.33, 11/3=3.67, 7/3=2.33
    assert result.to_object() == {
        "projectImpact": 1,
        "direction": 0,
        "engineeringExcellence": 3,
        "operationalOwnership": 4,
        "peopleImpact": 2,
    }


def test_aggregation_is_order_independent():
    feedbacks = [
        _feedback(_scores(0, 1, 2, 3, 4)),
        _feedback(_scores(4, 3, 2, 1, 0)),
        _feedback(_scores(1, 1, 4, 4, 3)),
    ]
    expected = aggregate_peer_scores(feedbacks)
    for perm in itertools.permutations(feedbacks):
        assert aggregate_peer_scores(list(perm)).equals(expected)


def test_extreme_scores_stay_in_bounds():
    low = aggregate_peer_scores([_feedback(_scores(0, 0, 0, 0, 0))] * 3)
    high = aggregate_peer_scores([_feedback(_scores(4, 4, 4, 4, 4))] * 3)
    for pillar in PILLARS:
        assert low.score_for(pillar).value == 0
        assert high.score_for(pillar).value == 4


@pytest.mark.parametrize("empty", [[], None, ()])
def test_empty_input_raises_no_feedback(empty):
    with pytest.raises(NoFeedbackError) as exc:
        aggregate_peer_scores(empty)
    assert exc.value.code == "NO_PEER_FEEDBACK"
    assert exc.value.http_status == 404


def test_input_sequence_not_mutated():
    feedbacks = [_feedback(offset=1), _feedback(offset=0)]
    snapshot = list(feedbacks)
    anonymize_feedback(feedbacks)
    assert feedbacks == snapshot


# --- Comments ------------------------------------------------------------------

def test_collect_comments_keeps_submission_order_and_skips_empty():
    grouped = collect_comments([
        _feedback(strengths="Great mentor", growth_areas=None, general_comments=""),
        _feedback(strengths="", growth_areas="Delegate more", general_comments="Solid"),
        _feedback(strengths="Ships fast", growth_areas="Write docs"),
    ])
    assert grouped.strengths == ("Great mentor", "Ships fast")
    assert grouped.growth_areas == ("Delegate more", "Write docs")
    assert grouped.general == ("Solid",)


def test_flatten_comments_groups_by_field_not_by_source():
    grouped = collect_comments([
        _feedback(strengths="S1", growth_areas="G1", general_comments="C1"),
        _feedback(strengths="S2", growth_areas="G2"),
    ])
    flat = flatten_comments(grouped)
    assert [(c.pillar, c.comment) for c in flat] == [
        (CommentTag.STRENGTHS, "S1"),
        (CommentTag.STRENGTHS, "S2"),
        (CommentTag.GROWTH_AREAS, "G1"),
        (CommentTag.GROWTH_AREAS, "G2"),
        (CommentTag.GENERAL, "C1"),
    ]


def test_no_comments_yields_empty_lists():
    result = anonymize_feedback([_feedback(), _feedback()])
    assert result.anonymized_comments.to_dict() == {
        "strengths": [], "growthAreas": [], "general": [],
    }
    assert result.comments == ()


# --- anonymize_feedback --------------------------------------------------------

def test_anonymize_feedback_counts_and_averages():
    result = anonymize_feedback([
        _feedback(_scores(3, 3, 3, 3, 3), strengths="Clear"),
        _feedback(_scores(4, 2, 3, 3, 2)),
    ])
    assert result.feedback_count == 2
    assert result.project_impact == 4
    assert result.direction == 3
    assert result.engineering_excellence == 3
    assert result.operational_ownership == 3
    assert result.people_impact == 3


def test_anonymize_feedback_omits_reviewer_identity():
    feedbacks = [
        _feedback(strengths="Helpful", growth_areas="Focus", general_comments="Thanks"),
        _feedback(strengths="Kind"),
    ]
    payload = anonymize_feedback(feedbacks).to_dict()
    rendered = repr(payload)
    for fb in feedbacks:
        assert str(fb.reviewer_id) not in rendered
        assert str(fb.id) not in rendered
    assert "reviewerId" not in rendered
    assert "reviewer_id" not in rendered


def test_to_dict_wire_shape():
    payload = anonymize_feedback([_feedback(_scores(1, 2, 3, 4, 0), strengths="S")]).to_dict()
    assert payload["feedbackCount"] == 1
    assert payload["averageScores"]["engineeringExcellence"] == 3
    assert payload["peopleImpact"] == 0
    assert payload["anonymizedComments"]["strengths"] == ["S"]
    assert payload["comments"] == [{"pillar": "strengths", "comment": "S"}]


def test_anonymize_empty_raises():
    with pytest.raises(NoFeedbackError):
        anonymize_feedback([])


def test_aggregate_feedback_is_alias():
    feedbacks = [_feedback(strengths="A")]
    assert aggregate_feedback(feedbacks) == anonymize_feedback(feedbacks)


# --- Service facade ------------------------------------------------------------

def test_service_delegates_to_functions():
    service = PeerFeedbackAggregationService()
    feedbacks = [_feedback(_scores(1, 1, 1, 1, 1)), _feedback(_scores(2, 2, 2, 2, 2))]
    assert service.aggregate_peer_scores(feedbacks).equals(_scores(2, 2, 2, 2, 2))
    assert service.anonymize_feedback(feedbacks) == service.aggregate_feedback(feedbacks)


def test_service_raises_on_empty():
    with pytest.raises(NoFeedbackError):
        PeerFeedbackAggregationService().aggregate_feedback(None)
