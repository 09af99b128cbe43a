"""Review Cycle Services — persistence of creation and transitions.

Invariants:
    - Created cycles are persisted in DRAFT
    - Transitions are persisted; illegal ones leave the stored status untouched
    - Only one ACTIVE cycle at a time
    - Missing cycles raise ResourceNotFoundError
"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from perf_review.core.domain_types import CycleId, CycleStatus
from perf_review.core.errors import (
    ActiveCycleConflictError,
    InvalidCycleTransitionError,
    ResourceNotFoundError,
)
from perf_review.services import review_cycles


async def test_create_persists_draft(cycle_repo, open_deadlines):
    cycle = await review_cycles.create_review_cycle(
        cycle_repo, "H1 2026", 2026, open_deadlines,
    )
    stored = await cycle_repo.get(cycle.id)
    assert stored.status is CycleStatus.DRAFT
    assert stored.name == "H1 2026"
    assert stored.deadlines == open_deadlines


async def test_stored_timestamps_are_utc_aware(cycle_repo, open_deadlines):
    cycle = await review_cycles.create_review_cycle(
        cycle_repo, "H1", 2026, open_deadlines,
    )
    stored = await review_cycles.get_review_cycle(cycle_repo, cycle.id)
    assert stored.start_date.tzinfo is not None
    assert stored.deadlines.peer_feedback.tzinfo is not None


async def test_get_missing_cycle_raises(cycle_repo):
    with pytest.raises(ResourceNotFoundError):
        await review_cycles.get_review_cycle(cycle_repo, CycleId(uuid4()))


async def test_no_active_cycle_raises(cycle_repo, open_deadlines):
    await review_cycles.create_review_cycle(cycle_repo, "Draft", 2026, open_deadlines)
    with pytest.raises(ResourceNotFoundError):
        await review_cycles.get_active_cycle(cycle_repo)


async def test_full_lifecycle_is_persisted(cycle_repo, open_deadlines):
    cycle = await review_cycles.create_review_cycle(
        cycle_repo, "H1", 2026, open_deadlines,
    )
    started = await review_cycles.start_review_cycle(cycle_repo, cycle.id)
    assert started.status is CycleStatus.ACTIVE
    assert (await review_cycles.get_active_cycle(cycle_repo)).id == cycle.id

    calibrating = await review_cycles.enter_calibration(cycle_repo, cycle.id)
    assert calibrating.status is CycleStatus.CALIBRATION

    end = datetime(2026, 12, 31, tzinfo=timezone.utc)
    completed = await review_cycles.complete_review_cycle(cycle_repo, cycle.id, now=end)
    assert completed.status is CycleStatus.COMPLETED
    assert completed.end_date == end

    stored = await cycle_repo.get(cycle.id)
    assert stored.is_completed
    assert stored.end_date == end


async def test_illegal_transition_leaves_stored_status(cycle_repo, open_deadlines):
    cycle = await review_cycles.create_review_cycle(
        cycle_repo, "H1", 2026, open_deadlines,
    )
    with pytest.raises(InvalidCycleTransitionError):
        await review_cycles.complete_review_cycle(cycle_repo, cycle.id)
    assert (await cycle_repo.get(cycle.id)).status is CycleStatus.DRAFT


async def test_second_active_cycle_rejected(cycle_repo, open_deadlines):
    first = await review_cycles.create_review_cycle(cycle_repo, "A", 2026, open_deadlines)
    second = await review_cycles.create_review_cycle(cycle_repo, "B", 2026, open_deadlines)
    await review_cycles.start_review_cycle(cycle_repo, first.id)

    with pytest.raises(ActiveCycleConflictError) as exc:
        await review_cycles.start_review_cycle(cycle_repo, second.id)
    assert exc.value.active_cycle_id == str(first.id)
    assert (await cycle_repo.get(second.id)).status is CycleStatus.DRAFT


async def test_restarting_active_cycle_is_invalid_transition(cycle_repo, open_deadlines):
    cycle = await review_cycles.create_review_cycle(cycle_repo, "A", 2026, open_deadlines)
    await review_cycles.start_review_cycle(cycle_repo, cycle.id)
    with pytest.raises(InvalidCycleTransitionError):
        await review_cycles.start_review_cycle(cycle_repo, cycle.id)


async def test_new_cycle_can_start_once_previous_leaves_active(cycle_repo, open_deadlines):
    first = await review_cycles.create_review_cycle(cycle_repo, "A", 2026, open_deadlines)
    second = await review_cycles.create_review_cycle(cycle_repo, "B", 2026, open_deadlines)
    await review_cycles.start_review_cycle(cycle_repo, first.id)
    await review_cycles.enter_calibration(cycle_repo, first.id)

    started = await review_cycles.start_review_cycle(cycle_repo, second.id)
    assert started.is_active
