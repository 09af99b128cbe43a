"""Review Cycle Services — create, look up and transition review cycles.

Invariants:
    - Transition legality is decided by ReviewCycle, never re-implemented here
    - At most one cycle is ACTIVE at a time (checked before start)
    - Every successful transition is persisted before returning

Design Decisions:
    - Plain async functions over a repository protocol: impure shell around the pure core
    - Missing cycles raise ResourceNotFoundError (404), not None
"""

import logging
from datetime import datetime

from perf_review.core.cycle_deadlines import CycleDeadlines
from perf_review.core.domain_types import CycleId
from perf_review.core.errors import (
    ActiveCycleConflictError, ErrorContext, ResourceNotFoundError,
)
from perf_review.core.repository_protocols import ReviewCycleRepository
from perf_review.core.review_cycle import ReviewCycle

logger = logging.getLogger(__name__)


async def create_review_cycle(
    repo: ReviewCycleRepository,
    name: str,
    year: int,
    deadlines: CycleDeadlines,
    start_date: datetime | None = None,
) -> ReviewCycle:
    """Create a DRAFT cycle. Deadline order is validated when `deadlines` is built."""
    cycle = ReviewCycle.create(
        name=name, year=year, deadlines=deadlines, start_date=start_date,
    )
    saved = await repo.save(cycle)
    logger.info(
        f"Review cycle '{saved.name}' created",
        extra={"cycle_id": str(saved.id), "status": saved.status.value},
    )
    return saved


async def get_review_cycle(
    repo: ReviewCycleRepository, cycle_id: CycleId,
) -> ReviewCycle:
    cycle = await repo.get(cycle_id)
    if cycle is None:
        raise ResourceNotFoundError(
            "Review cycle", str(cycle_id),
            context=ErrorContext(cycle_id=str(cycle_id)),
        )
    return cycle


async def get_active_cycle(repo: ReviewCycleRepository) -> ReviewCycle:
    cycle = await repo.get_active()
    if cycle is None:
        raise ResourceNotFoundError("Review cycle", "active")
    return cycle


async def start_review_cycle(
    repo: ReviewCycleRepository, cycle_id: CycleId,
) -> ReviewCycle:
    """DRAFT -> ACTIVE, refusing while another cycle is ACTIVE."""
    cycle = await get_review_cycle(repo, cycle_id)
    active = await repo.get_active()
    if active is not None and active.id != cycle.id:
        raise ActiveCycleConflictError(
            str(active.id), context=ErrorContext(cycle_id=str(cycle.id)),
        )
    cycle.start()
    return await _persist_transition(repo, cycle)


async def enter_calibration(
    repo: ReviewCycleRepository, cycle_id: CycleId,
) -> ReviewCycle:
    """ACTIVE -> CALIBRATION."""
    cycle = await get_review_cycle(repo, cycle_id)
    cycle.enter_calibration()
    return await _persist_transition(repo, cycle)


async def complete_review_cycle(
    repo: ReviewCycleRepository, cycle_id: CycleId, now: datetime | None = None,
) -> ReviewCycle:
    """CALIBRATION -> COMPLETED, stamping the end date."""
    cycle = await get_review_cycle(repo, cycle_id)
    cycle.complete(now)
    return await _persist_transition(repo, cycle)


async def _persist_transition(
    repo: ReviewCycleRepository, cycle: ReviewCycle,
) -> ReviewCycle:
    saved = await repo.save(cycle)
    logger.info(
        f"Review cycle moved to {saved.status.value}",
        extra={"cycle_id": str(saved.id), "status": saved.status.value},
    )
    return saved
