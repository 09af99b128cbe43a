"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Lookups return fully materialized lists; the core never sees a pending query

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, but the pure functions that consume
      their results are never async themselves
"""

from typing import Protocol

from perf_review.core.domain_types import CycleId, UserId
from perf_review.core.peer_feedback import PeerFeedback
from perf_review.core.peer_nomination import PeerNomination
from perf_review.core.review_cycle import ReviewCycle


class ReviewCycleRepository(Protocol):
    """Contract for review cycle persistence — implemented by shell."""
    async def get(self, cycle_id: CycleId) -> ReviewCycle | None: ...
    async def get_active(self) -> ReviewCycle | None: ...
    async def save(self, cycle: ReviewCycle) -> ReviewCycle: ...


class PeerFeedbackRepository(Protocol):
    """Contract for peer feedback persistence — implemented by shell."""
    async def save(self, feedback: PeerFeedback) -> PeerFeedback: ...
    async def find_by_reviewee_and_cycle(
        self, reviewee_id: UserId, cycle_id: CycleId,
    ) -> list[PeerFeedback]: ...
    async def find_by_reviewer_and_cycle(
        self, reviewer_id: UserId, cycle_id: CycleId,
    ) -> list[PeerFeedback]: ...


class PeerNominationRepository(Protocol):
    """Contract for peer nomination persistence — implemented by shell."""
    async def save(self, nomination: PeerNomination) -> PeerNomination: ...
    async def find_by_nominator_and_cycle(
        self, nominator_id: UserId, cycle_id: CycleId,
    ) -> list[PeerNomination]: ...
    async def find_by_nominee_and_cycle(
        self, nominee_id: UserId, cycle_id: CycleId,
    ) -> list[PeerNomination]: ...
