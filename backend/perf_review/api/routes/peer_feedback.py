"""Peer Feedback Routes — nominations, feedback requests, submissions and the anonymized aggregate.

Invariants:
    - Submission responses echo only id, revieweeId, submittedAt, isAnonymized
    - The aggregate response never includes reviewer identity
    - Caller identity arrives in the body or query (authentication is handled upstream)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from perf_review.api.dependencies import (
    get_app_settings,
    get_cycle_repository,
    get_feedback_repository,
    get_nomination_repository,
)
from perf_review.config import Settings
from perf_review.core.domain_types import CycleId, UserId
from perf_review.infrastructure.repositories import (
    SqlPeerFeedbackRepository,
    SqlPeerNominationRepository,
    SqlReviewCycleRepository,
)
from perf_review.schemas.peer_feedback import (
    AggregatedPeerFeedbackResponse,
    FeedbackRequestResponse,
    FeedbackRequestsResponse,
    MyNominationsResponse,
    NominatePeersRequest,
    NominatePeersResponse,
    NominationResponse,
    PeerFeedbackSubmit,
    PeerFeedbackSubmitted,
)
from perf_review.services import peer_feedback

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/review-cycles", tags=["peer-feedback"])


@router.post(
    "/{cycle_id}/nominations", response_model=NominatePeersResponse,
    status_code=status.HTTP_201_CREATED,
)
async def nominate_peers(
    cycle_id: UUID,
    body: NominatePeersRequest,
    cycles: SqlReviewCycleRepository = Depends(get_cycle_repository),
    nominations: SqlPeerNominationRepository = Depends(get_nomination_repository),
    settings: Settings = Depends(get_app_settings),
):
    """Nominate peers to give feedback to the nominator."""
    saved = await peer_feedback.nominate_peers(
        cycles,
        nominations,
        cycle_id=CycleId(cycle_id),
        nominator_id=UserId(body.nominator_id),
        nominee_ids=[UserId(n) for n in body.nominee_ids],
        minimum=settings.min_peer_nominations,
        maximum=settings.max_peer_nominations,
    )
    return NominatePeersResponse(
        nominations=[NominationResponse.from_domain(n) for n in saved],
    )


@router.get("/{cycle_id}/nominations", response_model=MyNominationsResponse)
async def get_my_nominations(
    cycle_id: UUID,
    nominator_id: UUID = Query(alias="nominatorId"),
    cycles: SqlReviewCycleRepository = Depends(get_cycle_repository),
    nominations: SqlPeerNominationRepository = Depends(get_nomination_repository),
):
    """Nominations the nominator made in this cycle, with their status."""
    mine = await peer_feedback.get_my_nominations(
        cycles, nominations, CycleId(cycle_id), UserId(nominator_id),
    )
    return MyNominationsResponse(
        nominations=[NominationResponse.from_domain(n) for n in mine],
        total=len(mine),
    )


@router.get("/{cycle_id}/nominations/requests", response_model=FeedbackRequestsResponse)
async def get_feedback_requests(
    cycle_id: UUID,
    reviewer_id: UUID = Query(alias="reviewerId"),
    cycles: SqlReviewCycleRepository = Depends(get_cycle_repository),
    nominations: SqlPeerNominationRepository = Depends(get_nomination_repository),
    feedback_repo: SqlPeerFeedbackRepository = Depends(get_feedback_repository),
):
    """Peers who nominated the reviewer, and whether feedback was already given."""
    requests = await peer_feedback.get_feedback_requests(
        cycles, nominations, feedback_repo, CycleId(cycle_id), UserId(reviewer_id),
    )
    return FeedbackRequestsResponse(
        requests=[FeedbackRequestResponse.from_domain(r) for r in requests],
        total=len(requests),
    )


@router.post(
    "/{cycle_id}/peer-feedback", response_model=PeerFeedbackSubmitted,
    status_code=status.HTTP_201_CREATED,
)
async def submit_peer_feedback(
    cycle_id: UUID,
    body: PeerFeedbackSubmit,
    cycles: SqlReviewCycleRepository = Depends(get_cycle_repository),
    nominations: SqlPeerNominationRepository = Depends(get_nomination_repository),
    feedback_repo: SqlPeerFeedbackRepository = Depends(get_feedback_repository),
):
    """Submit one peer's scores and comments about a reviewee."""
    saved = await peer_feedback.submit_peer_feedback(
        cycles,
        nominations,
        feedback_repo,
        cycle_id=CycleId(cycle_id),
        reviewer_id=UserId(body.reviewer_id),
        reviewee_id=UserId(body.reviewee_id),
        scores=body.scores.model_dump(by_alias=True),
        strengths=body.strengths,
        growth_areas=body.growth_areas,
        general_comments=body.general_comments,
    )
    return PeerFeedbackSubmitted.from_domain(saved)


@router.get(
    "/{cycle_id}/peer-feedback/{reviewee_id}/aggregate",
    response_model=AggregatedPeerFeedbackResponse,
)
async def get_aggregated_peer_feedback(
    cycle_id: UUID,
    reviewee_id: UUID,
    feedback_repo: SqlPeerFeedbackRepository = Depends(get_feedback_repository),
):
    """Anonymized per-pillar averages and comments for one reviewee."""
    aggregated = await peer_feedback.get_aggregated_peer_feedback(
        feedback_repo, CycleId(cycle_id), UserId(reviewee_id),
    )
    return AggregatedPeerFeedbackResponse.from_domain(
        reviewee_id, cycle_id, aggregated,
    )
