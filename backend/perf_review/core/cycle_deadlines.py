"""Cycle Deadlines — the five ordered phase deadlines of a review cycle.

Invariants:
    - self_review < peer_feedback < manager_evaluation < calibration < feedback_delivery (strict)
    - Violations raise InvalidDeadlineOrderError naming the first out-of-order pair
    - Immutable after creation; all stored datetimes are timezone-aware UTC
    - has_passed_deadline() is PURE given `now`: no state change

Design Decisions:
    - Naive datetimes are read as UTC so mixed-awareness comparisons never reach the caller
"""

from dataclasses import dataclass
from datetime import datetime

from perf_review.core.clock import as_utc, utc_now
from perf_review.core.domain_types import DEADLINE_PHASES, PHASE_LABELS, DeadlinePhase
from perf_review.core.errors import InvalidDeadlineOrderError


@dataclass(frozen=True)
class CycleDeadlines:
    """Container for the five phase deadlines."""
    self_review: datetime
    peer_feedback: datetime
    manager_evaluation: datetime
    calibration: datetime
    feedback_delivery: datetime

    def __post_init__(self):
        for phase in DEADLINE_PHASES:
            attr = _ATTRS[phase]
            object.__setattr__(self, attr, as_utc(getattr(self, attr)))
        self._validate_order()

    @classmethod
    def create(
        cls,
        *,
        self_review: datetime,
        peer_feedback: datetime,
        manager_evaluation: datetime,
        calibration: datetime,
        feedback_delivery: datetime,
    ) -> "CycleDeadlines":
        return cls(
            self_review=self_review,
            peer_feedback=peer_feedback,
            manager_evaluation=manager_evaluation,
            calibration=calibration,
            feedback_delivery=feedback_delivery,
        )

    def _validate_order(self) -> None:
        for previous, current in zip(DEADLINE_PHASES, DEADLINE_PHASES[1:]):
            if self.deadline_for(current) <= self.deadline_for(previous):
                raise InvalidDeadlineOrderError(
                    PHASE_LABELS[previous], PHASE_LABELS[current],
                )

    def deadline_for(self, phase: DeadlinePhase | str) -> datetime:
        """Deadline of a phase, by enum or camelCase name."""
        return getattr(self, _ATTRS[DeadlinePhase(phase)])

    def has_passed_deadline(
        self, phase: DeadlinePhase | str, now: datetime | None = None,
    ) -> bool:
        current = as_utc(now) if now is not None else utc_now()
        return current > self.deadline_for(phase)

    def to_object(self) -> dict[str, datetime]:
        return {phase.value: self.deadline_for(phase) for phase in DEADLINE_PHASES}


_ATTRS: dict[DeadlinePhase, str] = {
    DeadlinePhase.SELF_REVIEW: "self_review",
    DeadlinePhase.PEER_FEEDBACK: "peer_feedback",
    DeadlinePhase.MANAGER_EVALUATION: "manager_evaluation",
    DeadlinePhase.CALIBRATION: "calibration",
    DeadlinePhase.FEEDBACK_DELIVERY: "feedback_delivery",
}
