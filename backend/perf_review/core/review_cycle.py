"""Review Cycle — state machine governing one review period.

Invariants:
    - create() always yields DRAFT, whatever deadlines are supplied
    - Only legal path: DRAFT -> ACTIVE -> CALIBRATION -> COMPLETED (no skips, no way back)
    - Every illegal transition raises InvalidCycleTransitionError naming current and required state
    - end_date is set only by complete()
    - name, year and deadlines are fixed for the life of the cycle
    - has_deadline_passed() is a query; it never changes status

Design Decisions:
    - status lives in a single private field behind a read-only property (no public setter)
    - match over CycleStatus at each transition site: every state handled explicitly
    - restore() is the only way to build a non-DRAFT cycle (persistence mapper)
"""

import uuid
from datetime import datetime

from perf_review.core.clock import as_utc, utc_now
from perf_review.core.cycle_deadlines import CycleDeadlines
from perf_review.core.domain_types import CycleId, CycleStatus, DeadlinePhase
from perf_review.core.errors import ErrorContext, InvalidCycleTransitionError


class ReviewCycle:
    """Review cycle aggregate — owns its deadlines, transitions through four states."""

    def __init__(
        self,
        id: CycleId,
        name: str,
        year: int,
        status: CycleStatus,
        deadlines: CycleDeadlines,
        start_date: datetime,
        end_date: datetime | None = None,
    ):
        self._id = id
        self._name = name
        self._year = year
        self._status = status
        self._deadlines = deadlines
        self._start_date = as_utc(start_date)
        self._end_date = as_utc(end_date) if end_date else None

    @classmethod
    def create(
        cls,
        name: str,
        year: int,
        deadlines: CycleDeadlines,
        start_date: datetime | None = None,
        id: CycleId | None = None,
    ) -> "ReviewCycle":
        """New cycle in DRAFT status."""
        return cls(
            id=id or CycleId(uuid.uuid4()),
            name=name,
            year=year,
            status=CycleStatus.DRAFT,
            deadlines=deadlines,
            start_date=start_date or utc_now(),
        )

    @classmethod
    def restore(
        cls,
        id: CycleId,
        name: str,
        year: int,
        status: CycleStatus,
        deadlines: CycleDeadlines,
        start_date: datetime,
        end_date: datetime | None = None,
    ) -> "ReviewCycle":
        """Rebuild a persisted cycle in whatever status it was stored."""
        return cls(id, name, year, status, deadlines, start_date, end_date)

    # --- Transitions ---------------------------------------------------------

    def start(self) -> None:
        """DRAFT -> ACTIVE."""
        match self._status:
            case CycleStatus.DRAFT:
                self._status = CycleStatus.ACTIVE
            case CycleStatus.ACTIVE | CycleStatus.CALIBRATION | CycleStatus.COMPLETED:
                raise self._transition_error("start cycle", CycleStatus.DRAFT)

    def activate(self) -> None:
        """Alias for start()."""
        self.start()

    def enter_calibration(self) -> None:
        """ACTIVE -> CALIBRATION."""
        match self._status:
            case CycleStatus.ACTIVE:
                self._status = CycleStatus.CALIBRATION
            case CycleStatus.DRAFT | CycleStatus.CALIBRATION | CycleStatus.COMPLETED:
                raise self._transition_error("enter calibration", CycleStatus.ACTIVE)

    def complete(self, now: datetime | None = None) -> None:
        """CALIBRATION -> COMPLETED, stamping end_date."""
        match self._status:
            case CycleStatus.CALIBRATION:
                self._status = CycleStatus.COMPLETED
                self._end_date = as_utc(now) if now else utc_now()
            case CycleStatus.DRAFT | CycleStatus.ACTIVE | CycleStatus.COMPLETED:
                raise self._transition_error("complete cycle", CycleStatus.CALIBRATION)

    def _transition_error(
        self, action: str, required: CycleStatus,
    ) -> InvalidCycleTransitionError:
        return InvalidCycleTransitionError(
            action, self._status.value, required.value,
            context=ErrorContext(cycle_id=str(self._id)),
        )

    # --- Queries -------------------------------------------------------------

    def has_deadline_passed(
        self, phase: DeadlinePhase | str, now: datetime | None = None,
    ) -> bool:
        return self._deadlines.has_passed_deadline(phase, now)

    @property
    def id(self) -> CycleId:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def year(self) -> int:
        return self._year

    @property
    def status(self) -> CycleStatus:
        return self._status

    @property
    def deadlines(self) -> CycleDeadlines:
        return self._deadlines

    @property
    def start_date(self) -> datetime:
        return self._start_date

    @property
    def end_date(self) -> datetime | None:
        return self._end_date

    @property
    def is_active(self) -> bool:
        return self._status is CycleStatus.ACTIVE

    @property
    def is_completed(self) -> bool:
        return self._status is CycleStatus.COMPLETED

    def __repr__(self) -> str:
        return f"ReviewCycle(id={self._id}, name={self._name!r}, status={self._status.value})"
