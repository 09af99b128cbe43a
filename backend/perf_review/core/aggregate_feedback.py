"""Peer Feedback Aggregation — per-pillar averages and anonymized comment digests.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no mutation of the input sequence
    - None and empty input both raise NoFeedbackError
    - Averages use round-half-up (2.5 -> 3, 3.5 -> 4), never banker's rounding
    - Rounded averages go back through PillarScores.create (0–4 bound kept by construction)
    - Comment lists keep submission order; None and "" are skipped alike
    - Flattened comments: all strengths, then all growthAreas, then all general
    - Reviewer identity is absent from every output, at every level

Design Decisions:
    - Pure functions + thin PeerFeedbackAggregationService facade: callers that want an
      injectable collaborator get one, tests call the functions directly
    - AnonymizedPeerFeedback is built only from scores and comment text, so anonymity
      holds by omission rather than redaction
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from perf_review.core.domain_types import PILLARS, CommentTag, Pillar
from perf_review.core.errors import NoFeedbackError
from perf_review.core.peer_feedback import PeerFeedback
from perf_review.core.pillar_scores import PillarScores


@dataclass(frozen=True)
class AnonymizedComments:
    """Comment text grouped by source field, submission order preserved."""
    strengths: tuple[str, ...]
    growth_areas: tuple[str, ...]
    general: tuple[str, ...]

    def to_dict(self) -> dict[str, list[str]]:
        return {
            CommentTag.STRENGTHS.value: list(self.strengths),
            CommentTag.GROWTH_AREAS.value: list(self.growth_areas),
            CommentTag.GENERAL.value: list(self.general),
        }


@dataclass(frozen=True)
class TaggedComment:
    pillar: CommentTag
    comment: str

    def to_dict(self) -> dict[str, str]:
        return {"pillar": self.pillar.value, "comment": self.comment}


@dataclass(frozen=True)
class AnonymizedPeerFeedback:
    """Consolidated, de-identified peer feedback for one reviewee."""
    average_scores: PillarScores
    feedback_count: int
    anonymized_comments: AnonymizedComments
    comments: tuple[TaggedComment, ...]

    @property
    def project_impact(self) -> int:
        return self.average_scores.project_impact.value

    @property
    def direction(self) -> int:
        return self.average_scores.direction.value

    @property
    def engineering_excellence(self) -> int:
        return self.average_scores.engineering_excellence.value

    @property
    def operational_ownership(self) -> int:
        return self.average_scores.operational_ownership.value

    @property
    def people_impact(self) -> int:
        return self.average_scores.people_impact.value

    def to_dict(self) -> dict:
        """Wire shape: camelCase keys, top-level pillar averages."""
        return {
            "averageScores": self.average_scores.to_object(),
            "feedbackCount": self.feedback_count,
            "anonymizedComments": self.anonymized_comments.to_dict(),
            **self.average_scores.to_object(),
            "comments": [c.to_dict() for c in self.comments],
        }


def round_half_up(value: float) -> int:
    """Round to nearest int, .5 going up (Python's round() is half-to-even)."""
    return math.floor(value + 0.5)


def aggregate_peer_scores(feedbacks: Sequence[PeerFeedback] | None) -> PillarScores:
    """Per-pillar rounded average across all feedback. Raises NoFeedbackError if none."""
    if not feedbacks:
        raise NoFeedbackError()

    sums: dict[Pillar, int] = {pillar: 0 for pillar in PILLARS}
    for feedback in feedbacks:
        for pillar in PILLARS:
            sums[pillar] += feedback.scores.score_for(pillar).value

    count = len(feedbacks)
    averages = {pillar: round_half_up(sums[pillar] / count) for pillar in PILLARS}
    return PillarScores.create(
        project_impact=averages[Pillar.PROJECT_IMPACT],
        direction=averages[Pillar.DIRECTION],
        engineering_excellence=averages[Pillar.ENGINEERING_EXCELLENCE],
        operational_ownership=averages[Pillar.OPERATIONAL_OWNERSHIP],
        people_impact=averages[Pillar.PEOPLE_IMPACT],
    )


def collect_comments(feedbacks: Sequence[PeerFeedback]) -> AnonymizedComments:
    """Gather non-empty comment text per field, in submission order."""
    strengths: list[str] = []
    growth_areas: list[str] = []
    general: list[str] = []
    for feedback in feedbacks:
        if feedback.strengths:
            strengths.append(feedback.strengths)
        if feedback.growth_areas:
            growth_areas.append(feedback.growth_areas)
        if feedback.general_comments:
            general.append(feedback.general_comments)
    return AnonymizedComments(tuple(strengths), tuple(growth_areas), tuple(general))


def flatten_comments(grouped: AnonymizedComments) -> tuple[TaggedComment, ...]:
    """Strengths first, then growth areas, then general; never interleaved by source."""
    return (
        *(TaggedComment(CommentTag.STRENGTHS, c) for c in grouped.strengths),
        *(TaggedComment(CommentTag.GROWTH_AREAS, c) for c in grouped.growth_areas),
        *(TaggedComment(CommentTag.GENERAL, c) for c in grouped.general),
    )


def anonymize_feedback(
    feedbacks: Sequence[PeerFeedback] | None,
) -> AnonymizedPeerFeedback:
    """Aggregate scores and comments with reviewer identity omitted."""
    if not feedbacks:
        raise NoFeedbackError()

    average_scores = aggregate_peer_scores(feedbacks)
    grouped = collect_comments(feedbacks)
    return AnonymizedPeerFeedback(
        average_scores=average_scores,
        feedback_count=len(feedbacks),
        anonymized_comments=grouped,
        comments=flatten_comments(grouped),
    )


aggregate_feedback = anonymize_feedback


class PeerFeedbackAggregationService:
    """Stateless facade over the aggregation functions."""

    def aggregate_peer_scores(
        self, feedbacks: Sequence[PeerFeedback] | None,
    ) -> PillarScores:
        return aggregate_peer_scores(feedbacks)

    def anonymize_feedback(
        self, feedbacks: Sequence[PeerFeedback] | None,
    ) -> AnonymizedPeerFeedback:
        return anonymize_feedback(feedbacks)

    def aggregate_feedback(
        self, feedbacks: Sequence[PeerFeedback] | None,
    ) -> AnonymizedPeerFeedback:
        """Alias for anonymize_feedback()."""
        return anonymize_feedback(feedbacks)
