"""SQLAlchemy Repositories — shell implementations of core repository protocols.

Invariants:
    - Every method returns core domain objects, never ORM rows
    - save() commits; callers never see a half-written aggregate
    - Timestamps read back from the DB are UTC-aware (SQLite drops tzinfo)
    - Lookups return lists in submission/nomination order

Design Decisions:
    - One repository per aggregate, all sharing the request-scoped AsyncSession
    - Mapping functions are module-level and pure: row <-> domain without IO
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from perf_review.core.clock import as_utc
from perf_review.core.cycle_deadlines import CycleDeadlines
from perf_review.core.domain_types import (
    CycleId, CycleStatus, FeedbackId, NominationId, NominationStatus, UserId,
)
from perf_review.core.peer_feedback import PeerFeedback
from perf_review.core.peer_nomination import PeerNomination
from perf_review.core.pillar_scores import PillarScores
from perf_review.core.review_cycle import ReviewCycle
from perf_review.models.peer_feedback import PeerFeedback as PeerFeedbackModel
from perf_review.models.peer_nomination import PeerNomination as PeerNominationModel
from perf_review.models.review_cycle import ReviewCycle as ReviewCycleModel

logger = logging.getLogger(__name__)


# --- Mappers -----------------------------------------------------------------

def cycle_from_row(row: ReviewCycleModel) -> ReviewCycle:
    deadlines = CycleDeadlines.create(
        self_review=as_utc(row.self_review_deadline),
        peer_feedback=as_utc(row.peer_feedback_deadline),
        manager_evaluation=as_utc(row.manager_evaluation_deadline),
        calibration=as_utc(row.calibration_deadline),
        feedback_delivery=as_utc(row.feedback_delivery_deadline),
    )
    return ReviewCycle.restore(
        id=CycleId(row.id),
        name=row.name,
        year=row.year,
        status=CycleStatus.from_string(row.status),
        deadlines=deadlines,
        start_date=as_utc(row.start_date),
        end_date=as_utc(row.end_date) if row.end_date else None,
    )


def _apply_cycle(row: ReviewCycleModel, cycle: ReviewCycle) -> None:
    row.name = cycle.name
    row.year = cycle.year
    row.status = cycle.status.value
    row.self_review_deadline = cycle.deadlines.self_review
    row.peer_feedback_deadline = cycle.deadlines.peer_feedback
    row.manager_evaluation_deadline = cycle.deadlines.manager_evaluation
    row.calibration_deadline = cycle.deadlines.calibration
    row.feedback_delivery_deadline = cycle.deadlines.feedback_delivery
    row.start_date = cycle.start_date
    row.end_date = cycle.end_date


def feedback_from_row(row: PeerFeedbackModel) -> PeerFeedback:
    scores = PillarScores.create(
        project_impact=row.project_impact,
        direction=row.direction,
        engineering_excellence=row.engineering_excellence,
        operational_ownership=row.operational_ownership,
        people_impact=row.people_impact,
    )
    return PeerFeedback.restore(
        id=FeedbackId(row.id),
        cycle_id=CycleId(row.cycle_id),
        reviewee_id=UserId(row.reviewee_id),
        reviewer_id=UserId(row.reviewer_id),
        scores=scores,
        strengths=row.strengths,
        growth_areas=row.growth_areas,
        general_comments=row.general_comments,
        submitted_at=as_utc(row.submitted_at),
    )


def feedback_to_row(feedback: PeerFeedback) -> PeerFeedbackModel:
    scores = feedback.scores
    return PeerFeedbackModel(
        id=feedback.id,
        cycle_id=feedback.cycle_id,
        reviewee_id=feedback.reviewee_id,
        reviewer_id=feedback.reviewer_id,
        project_impact=scores.project_impact.value,
        direction=scores.direction.value,
        engineering_excellence=scores.engineering_excellence.value,
        operational_ownership=scores.operational_ownership.value,
        people_impact=scores.people_impact.value,
        strengths=feedback.strengths,
        growth_areas=feedback.growth_areas,
        general_comments=feedback.general_comments,
        submitted_at=feedback.submitted_at,
    )


def nomination_from_row(row: PeerNominationModel) -> PeerNomination:
    return PeerNomination(
        id=NominationId(row.id),
        cycle_id=CycleId(row.cycle_id),
        nominator_id=UserId(row.nominator_id),
        nominee_id=UserId(row.nominee_id),
        status=NominationStatus(row.status),
        nominated_at=as_utc(row.nominated_at),
    )


# --- Repositories ------------------------------------------------------------

class SqlReviewCycleRepository:
    """ReviewCycleRepository backed by the review_cycles table."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def get(self, cycle_id: CycleId) -> ReviewCycle | None:
        row = await self._db.get(ReviewCycleModel, cycle_id)
        return cycle_from_row(row) if row else None

    async def get_active(self) -> ReviewCycle | None:
        result = await self._db.execute(
            select(ReviewCycleModel)
            .where(ReviewCycleModel.status == CycleStatus.ACTIVE.value)
            .order_by(ReviewCycleModel.start_date.desc())
            .limit(1),
        )
        row = result.scalar_one_or_none()
        return cycle_from_row(row) if row else None

    async def save(self, cycle: ReviewCycle) -> ReviewCycle:
        row = await self._db.get(ReviewCycleModel, cycle.id)
        if row is None:
            row = ReviewCycleModel(id=cycle.id)
            self._db.add(row)
        _apply_cycle(row, cycle)
        await self._db.commit()
        await self._db.refresh(row)
        return cycle_from_row(row)


class SqlPeerFeedbackRepository:
    """PeerFeedbackRepository backed by the peer_feedback table."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def save(self, feedback: PeerFeedback) -> PeerFeedback:
        row = feedback_to_row(feedback)
        self._db.add(row)
        await self._db.commit()
        await self._db.refresh(row)
        return feedback_from_row(row)

    async def find_by_reviewee_and_cycle(
        self, reviewee_id: UserId, cycle_id: CycleId,
    ) -> list[PeerFeedback]:
        result = await self._db.execute(
            select(PeerFeedbackModel)
            .where(
                PeerFeedbackModel.reviewee_id == reviewee_id,
                PeerFeedbackModel.cycle_id == cycle_id,
            )
            .order_by(PeerFeedbackModel.submitted_at),
        )
        return [feedback_from_row(row) for row in result.scalars().all()]

    async def find_by_reviewer_and_cycle(
        self, reviewer_id: UserId, cycle_id: CycleId,
    ) -> list[PeerFeedback]:
        result = await self._db.execute(
            select(PeerFeedbackModel)
            .where(
                PeerFeedbackModel.reviewer_id == reviewer_id,
                PeerFeedbackModel.cycle_id == cycle_id,
            )
            .order_by(PeerFeedbackModel.submitted_at),
        )
        return [feedback_from_row(row) for row in result.scalars().all()]


class SqlPeerNominationRepository:
    """PeerNominationRepository backed by the peer_nominations table."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def save(self, nomination: PeerNomination) -> PeerNomination:
        row = await self._db.get(PeerNominationModel, nomination.id)
        if row is None:
            row = PeerNominationModel(
                id=nomination.id,
                cycle_id=nomination.cycle_id,
                nominator_id=nomination.nominator_id,
                nominee_id=nomination.nominee_id,
                nominated_at=nomination.nominated_at,
            )
            self._db.add(row)
        row.status = nomination.status.value
        await self._db.commit()
        await self._db.refresh(row)
        return nomination_from_row(row)

    async def find_by_nominator_and_cycle(
        self, nominator_id: UserId, cycle_id: CycleId,
    ) -> list[PeerNomination]:
        result = await self._db.execute(
            select(PeerNominationModel)
            .where(
                PeerNominationModel.nominator_id == nominator_id,
                PeerNominationModel.cycle_id == cycle_id,
            )
            .order_by(PeerNominationModel.nominated_at),
        )
        return [nomination_from_row(row) for row in result.scalars().all()]

    async def find_by_nominee_and_cycle(
        self, nominee_id: UserId, cycle_id: CycleId,
    ) -> list[PeerNomination]:
        result = await self._db.execute(
            select(PeerNominationModel)
            .where(
                PeerNominationModel.nominee_id == nominee_id,
                PeerNominationModel.cycle_id == cycle_id,
            )
            .order_by(PeerNominationModel.nominated_at),
        )
        return [nomination_from_row(row) for row in result.scalars().all()]
