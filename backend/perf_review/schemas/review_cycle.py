"""Review Cycle Schemas — Pydantic models for cycle endpoints.

Invariants:
    - Wire format is camelCase (alias_generator); Python attributes stay snake_case
    - Deadline ORDER is not validated here: CycleDeadlines owns that rule
    - name is stripped and non-empty

Design Decisions:
    - from_domain() builders keep routes free of field-by-field mapping
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from perf_review.core.cycle_deadlines import CycleDeadlines
from perf_review.core.review_cycle import ReviewCycle


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DeadlinesPayload(CamelModel):
    """The five phase deadlines, in chronological order."""
    self_review: datetime
    peer_feedback: datetime
    manager_evaluation: datetime
    calibration: datetime
    feedback_delivery: datetime

    def to_domain(self) -> CycleDeadlines:
        return CycleDeadlines.create(
            self_review=self.self_review,
            peer_feedback=self.peer_feedback,
            manager_evaluation=self.manager_evaluation,
            calibration=self.calibration,
            feedback_delivery=self.feedback_delivery,
        )

    @classmethod
    def from_domain(cls, deadlines: CycleDeadlines) -> "DeadlinesPayload":
        return cls(
            self_review=deadlines.self_review,
            peer_feedback=deadlines.peer_feedback,
            manager_evaluation=deadlines.manager_evaluation,
            calibration=deadlines.calibration,
            feedback_delivery=deadlines.feedback_delivery,
        )


class ReviewCycleCreate(CamelModel):
    """Cycle creation — shape only; ordering checked by the core."""
    name: str = Field(min_length=1, max_length=200)
    year: int = Field(ge=2000, le=2100)
    deadlines: DeadlinesPayload
    start_date: datetime | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class ReviewCycleResponse(CamelModel):
    """Review cycle response — public-facing cycle data."""
    id: UUID
    name: str
    year: int
    status: str
    deadlines: DeadlinesPayload
    start_date: datetime
    end_date: datetime | None = None

    @classmethod
    def from_domain(cls, cycle: ReviewCycle) -> "ReviewCycleResponse":
        return cls(
            id=cycle.id,
            name=cycle.name,
            year=cycle.year,
            status=cycle.status.value,
            deadlines=DeadlinesPayload.from_domain(cycle.deadlines),
            start_date=cycle.start_date,
            end_date=cycle.end_date,
        )
