"""Route Dependencies — request-scoped repositories built on the request's DB session.

Invariants:
    - All repositories in one request share the same AsyncSession
    - Routes depend on these providers, never on SQLAlchemy directly
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from perf_review.config import Settings, get_settings
from perf_review.infrastructure.database import get_db
from perf_review.infrastructure.repositories import (
    SqlPeerFeedbackRepository,
    SqlPeerNominationRepository,
    SqlReviewCycleRepository,
)


def get_cycle_repository(
    db: AsyncSession = Depends(get_db),
) -> SqlReviewCycleRepository:
    return SqlReviewCycleRepository(db)


def get_nomination_repository(
    db: AsyncSession = Depends(get_db),
) -> SqlPeerNominationRepository:
    return SqlPeerNominationRepository(db)


def get_feedback_repository(
    db: AsyncSession = Depends(get_db),
) -> SqlPeerFeedbackRepository:
    return SqlPeerFeedbackRepository(db)


def get_app_settings() -> Settings:
    return get_settings()
