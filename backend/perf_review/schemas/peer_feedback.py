"""Peer Feedback Schemas — Pydantic models for nomination, request, submission and aggregate endpoints.

Invariants:
    - Score fields are typed int only; the 0–4 range is enforced by PillarScore so
      out-of-range input surfaces as INVALID_SCORE, not a generic validation error
    - Aggregate responses carry no reviewer field at any level
    - Comment fields: optional, max 5000 chars
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from perf_review.core.aggregate_feedback import AnonymizedPeerFeedback
from perf_review.core.peer_feedback import PeerFeedback
from perf_review.core.peer_nomination import FeedbackRequest, PeerNomination
from perf_review.schemas.review_cycle import CamelModel


class PillarScoresPayload(CamelModel):
    project_impact: int
    direction: int
    engineering_excellence: int
    operational_ownership: int
    people_impact: int


# --- Nominations --------------------------------------------------------------

class NominatePeersRequest(CamelModel):
    """The nominator (reviewee) asks these peers for feedback."""
    nominator_id: UUID
    nominee_ids: list[UUID] = Field(min_length=1, max_length=20)


class NominationResponse(CamelModel):
    id: UUID
    nominee_id: UUID
    status: str
    nominated_at: datetime

    @classmethod
    def from_domain(cls, nomination: PeerNomination) -> "NominationResponse":
        return cls(
            id=nomination.id,
            nominee_id=nomination.nominee_id,
            status=nomination.status.value,
            nominated_at=nomination.nominated_at,
        )


class NominatePeersResponse(CamelModel):
    nominations: list[NominationResponse]


class MyNominationsResponse(CamelModel):
    """Nominations the caller made in a cycle."""
    nominations: list[NominationResponse]
    total: int


class FeedbackRequestResponse(CamelModel):
    nomination_id: UUID
    nominator_id: UUID
    status: str
    nominated_at: datetime
    feedback_submitted: bool

    @classmethod
    def from_domain(cls, request: FeedbackRequest) -> "FeedbackRequestResponse":
        nomination = request.nomination
        return cls(
            nomination_id=nomination.id,
            nominator_id=nomination.nominator_id,
            status=nomination.status.value,
            nominated_at=nomination.nominated_at,
            feedback_submitted=request.feedback_submitted,
        )


class FeedbackRequestsResponse(CamelModel):
    """Peers who asked the caller for feedback in a cycle."""
    requests: list[FeedbackRequestResponse]
    total: int


# --- Submission ---------------------------------------------------------------

class PeerFeedbackSubmit(CamelModel):
    """One peer's feedback about a reviewee."""
    reviewer_id: UUID
    reviewee_id: UUID
    scores: PillarScoresPayload
    strengths: str | None = Field(None, max_length=5000)
    growth_areas: str | None = Field(None, max_length=5000)
    general_comments: str | None = Field(None, max_length=5000)


class PeerFeedbackSubmitted(CamelModel):
    id: UUID
    reviewee_id: UUID
    submitted_at: datetime
    is_anonymized: bool

    @classmethod
    def from_domain(cls, feedback: PeerFeedback) -> "PeerFeedbackSubmitted":
        return cls(
            id=feedback.id,
            reviewee_id=feedback.reviewee_id,
            submitted_at=feedback.submitted_at,
            is_anonymized=feedback.is_anonymized,
        )


# --- Aggregate ----------------------------------------------------------------

class TaggedCommentPayload(CamelModel):
    pillar: str
    comment: str


class AggregatedPeerFeedbackResponse(CamelModel):
    """Anonymized aggregate — scores and comment text only."""
    employee_id: UUID
    cycle_id: UUID
    aggregated_scores: PillarScoresPayload
    feedback_count: int
    anonymized_comments: list[TaggedCommentPayload]

    @classmethod
    def from_domain(
        cls, employee_id: UUID, cycle_id: UUID, aggregated: AnonymizedPeerFeedback,
    ) -> "AggregatedPeerFeedbackResponse":
        return cls(
            employee_id=employee_id,
            cycle_id=cycle_id,
            aggregated_scores=PillarScoresPayload(
                project_impact=aggregated.project_impact,
                direction=aggregated.direction,
                engineering_excellence=aggregated.engineering_excellence,
                operational_ownership=aggregated.operational_ownership,
                people_impact=aggregated.people_impact,
            ),
            feedback_count=aggregated.feedback_count,
            anonymized_comments=[
                TaggedCommentPayload(**c.to_dict()) for c in aggregated.comments
            ],
        )
