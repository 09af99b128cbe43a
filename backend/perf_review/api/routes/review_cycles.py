"""Review Cycle Routes — create, read and transition review cycles.

Invariants:
    - Routes never decide transition legality; ReviewCycle does
    - Domain errors propagate to the global PerfReviewError handler
    - /active is registered before /{cycle_id} so it is not parsed as a UUID
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status

from perf_review.api.dependencies import get_cycle_repository
from perf_review.core.domain_types import CycleId
from perf_review.infrastructure.repositories import SqlReviewCycleRepository
from perf_review.schemas.review_cycle import ReviewCycleCreate, ReviewCycleResponse
from perf_review.services import review_cycles

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/review-cycles", tags=["review-cycles"])


@router.post(
    "", response_model=ReviewCycleResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_review_cycle(
    body: ReviewCycleCreate,
    repo: SqlReviewCycleRepository = Depends(get_cycle_repository),
):
    """Create a review cycle in DRAFT status."""
    cycle = await review_cycles.create_review_cycle(
        repo,
        name=body.name,
        year=body.year,
        deadlines=body.deadlines.to_domain(),
        start_date=body.start_date,
    )
    return ReviewCycleResponse.from_domain(cycle)


@router.get("/active", response_model=ReviewCycleResponse)
async def get_active_cycle(
    repo: SqlReviewCycleRepository = Depends(get_cycle_repository),
):
    """The currently ACTIVE cycle, or 404."""
    cycle = await review_cycles.get_active_cycle(repo)
    return ReviewCycleResponse.from_domain(cycle)


@router.get("/{cycle_id}", response_model=ReviewCycleResponse)
async def get_review_cycle(
    cycle_id: UUID,
    repo: SqlReviewCycleRepository = Depends(get_cycle_repository),
):
    cycle = await review_cycles.get_review_cycle(repo, CycleId(cycle_id))
    return ReviewCycleResponse.from_domain(cycle)


@router.post("/{cycle_id}/start", response_model=ReviewCycleResponse)
async def start_review_cycle(
    cycle_id: UUID,
    repo: SqlReviewCycleRepository = Depends(get_cycle_repository),
):
    """DRAFT -> ACTIVE."""
    cycle = await review_cycles.start_review_cycle(repo, CycleId(cycle_id))
    return ReviewCycleResponse.from_domain(cycle)


@router.post("/{cycle_id}/calibration", response_model=ReviewCycleResponse)
async def enter_calibration(
    cycle_id: UUID,
    repo: SqlReviewCycleRepository = Depends(get_cycle_repository),
):
    """ACTIVE -> CALIBRATION."""
    cycle = await review_cycles.enter_calibration(repo, CycleId(cycle_id))
    return ReviewCycleResponse.from_domain(cycle)


@router.post("/{cycle_id}/complete", response_model=ReviewCycleResponse)
async def complete_review_cycle(
    cycle_id: UUID,
    repo: SqlReviewCycleRepository = Depends(get_cycle_repository),
):
    """CALIBRATION -> COMPLETED."""
    cycle = await review_cycles.complete_review_cycle(repo, CycleId(cycle_id))
    return ReviewCycleResponse.from_domain(cycle)
