"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - CycleId, FeedbackId, NominationId, UserId wrap UUIDs — never use bare UUID in domain logic
    - Pillar scores are bounded 0–4 (MIN_PILLAR_SCORE..MAX_PILLAR_SCORE)
    - PILLARS and DEADLINE_PHASES are ordered; order is part of the contract
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - Pillar/DeadlinePhase values are the camelCase wire names used by API payloads
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

CycleId = NewType("CycleId", UUID)
FeedbackId = NewType("FeedbackId", UUID)
NominationId = NewType("NominationId", UUID)
UserId = NewType("UserId", UUID)


# ─── Value Bounds ────────────────────────────────────────────────

MIN_PILLAR_SCORE: int = 0
MAX_PILLAR_SCORE: int = 4


# ─── Enums ───────────────────────────────────────────────────────

class CycleStatus(str, Enum):
    """Review cycle lifecycle states — maps to DB `status` column."""
    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    CALIBRATION = "CALIBRATION"
    COMPLETED = "COMPLETED"

    @classmethod
    def from_string(cls, status: str) -> "CycleStatus":
        """Case-insensitive lookup. Raises ValueError on unknown status."""
        try:
            return cls(status.upper())
        except ValueError:
            raise ValueError(f"Invalid cycle status: {status}") from None


class Pillar(str, Enum):
    """The five fixed performance pillars, in canonical order."""
    PROJECT_IMPACT = "projectImpact"
    DIRECTION = "direction"
    ENGINEERING_EXCELLENCE = "engineeringExcellence"
    OPERATIONAL_OWNERSHIP = "operationalOwnership"
    PEOPLE_IMPACT = "peopleImpact"


class DeadlinePhase(str, Enum):
    """Review cycle phases that carry a deadline, in chronological order."""
    SELF_REVIEW = "selfReview"
    PEER_FEEDBACK = "peerFeedback"
    MANAGER_EVALUATION = "managerEvaluation"
    CALIBRATION = "calibration"
    FEEDBACK_DELIVERY = "feedbackDelivery"


class NominationStatus(str, Enum):
    """Peer nomination states — PENDING and ACCEPTED allow feedback."""
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    DECLINED = "DECLINED"


class CommentTag(str, Enum):
    """Tags attached to flattened anonymized comments."""
    STRENGTHS = "strengths"
    GROWTH_AREAS = "growthAreas"
    GENERAL = "general"


PILLARS: tuple[Pillar, ...] = tuple(Pillar)
DEADLINE_PHASES: tuple[DeadlinePhase, ...] = tuple(DeadlinePhase)

# Human-readable phase names used in error messages
PHASE_LABELS: dict[DeadlinePhase, str] = {
    DeadlinePhase.SELF_REVIEW: "Self Review",
    DeadlinePhase.PEER_FEEDBACK: "Peer Feedback",
    DeadlinePhase.MANAGER_EVALUATION: "Manager Evaluation",
    DeadlinePhase.CALIBRATION: "Calibration",
    DeadlinePhase.FEEDBACK_DELIVERY: "Feedback Delivery",
}
