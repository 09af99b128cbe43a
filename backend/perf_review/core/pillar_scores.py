"""Pillar Scores — validated 0–4 integer scores for the five fixed pillars.

Invariants:
    - PillarScore.value is an int in [0, 4]; bool, float (even 2.0), NaN and None are rejected
    - PillarScores holds exactly five PillarScore fields, one per Pillar
    - Construction is fail-fast: the first invalid pillar raises, no partial object exists
    - Both types are immutable; equality is structural

Design Decisions:
    - Frozen dataclasses: structural __eq__ and hash for free, no setters
    - to_object() keys are the camelCase Pillar values (wire shape of API payloads)
"""

from dataclasses import dataclass
from typing import Any

from perf_review.core.domain_types import (
    MAX_PILLAR_SCORE, MIN_PILLAR_SCORE, PILLARS, Pillar,
)
from perf_review.core.errors import InvalidScoreError


@dataclass(frozen=True)
class PillarScore:
    """A single validated pillar score."""
    value: int

    def __post_init__(self):
        _validate_score(self.value)

    @classmethod
    def from_value(cls, value: Any, pillar: Pillar | None = None) -> "PillarScore":
        """Build a PillarScore. Raises InvalidScoreError on non-integer or out-of-range."""
        _validate_score(value, pillar)
        return cls(value)

    def equals(self, other: "PillarScore | None") -> bool:
        if other is None:
            return False
        return self.value == other.value

    def __str__(self) -> str:
        return str(self.value)


def _validate_score(value: Any, pillar: Pillar | None = None) -> None:
    label = f"{pillar.value} score" if pillar else "Pillar score"
    name = pillar.value if pillar else None
    # bool is an int subclass; True/False are not scores
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidScoreError(
            f"{label} must be an integer, got {value!r}", pillar=name,
        )
    if value < MIN_PILLAR_SCORE or value > MAX_PILLAR_SCORE:
        raise InvalidScoreError(
            f"{label} must be between {MIN_PILLAR_SCORE} and "
            f"{MAX_PILLAR_SCORE}, got {value}",
            pillar=name,
        )


@dataclass(frozen=True)
class PillarScores:
    """Immutable bundle of the five pillar scores."""
    project_impact: PillarScore
    direction: PillarScore
    engineering_excellence: PillarScore
    operational_ownership: PillarScore
    people_impact: PillarScore

    @classmethod
    def create(
        cls,
        *,
        project_impact: Any,
        direction: Any,
        engineering_excellence: Any,
        operational_ownership: Any,
        people_impact: Any,
    ) -> "PillarScores":
        """Validate each raw score in pillar order and bundle them."""
        return cls(
            project_impact=PillarScore.from_value(
                project_impact, Pillar.PROJECT_IMPACT,
            ),
            direction=PillarScore.from_value(direction, Pillar.DIRECTION),
            engineering_excellence=PillarScore.from_value(
                engineering_excellence, Pillar.ENGINEERING_EXCELLENCE,
            ),
            operational_ownership=PillarScore.from_value(
                operational_ownership, Pillar.OPERATIONAL_OWNERSHIP,
            ),
            people_impact=PillarScore.from_value(
                people_impact, Pillar.PEOPLE_IMPACT,
            ),
        )

    @classmethod
    def from_object(cls, scores: dict[str, Any]) -> "PillarScores":
        """Build from a camelCase record as produced by to_object()."""
        return cls.create(
            project_impact=scores.get(Pillar.PROJECT_IMPACT.value),
            direction=scores.get(Pillar.DIRECTION.value),
            engineering_excellence=scores.get(Pillar.ENGINEERING_EXCELLENCE.value),
            operational_ownership=scores.get(Pillar.OPERATIONAL_OWNERSHIP.value),
            people_impact=scores.get(Pillar.PEOPLE_IMPACT.value),
        )

    def score_for(self, pillar: Pillar) -> PillarScore:
        match pillar:
            case Pillar.PROJECT_IMPACT:
                return self.project_impact
            case Pillar.DIRECTION:
                return self.direction
            case Pillar.ENGINEERING_EXCELLENCE:
                return self.engineering_excellence
            case Pillar.OPERATIONAL_OWNERSHIP:
                return self.operational_ownership
            case Pillar.PEOPLE_IMPACT:
                return self.people_impact

    def to_object(self) -> dict[str, int]:
        return {pillar.value: self.score_for(pillar).value for pillar in PILLARS}

    def to_plain_object(self) -> dict[str, int]:
        """Alias for to_object()."""
        return self.to_object()

    def equals(self, other: "PillarScores | None") -> bool:
        if other is None:
            return False
        return all(
            self.score_for(p).equals(other.score_for(p)) for p in PILLARS
        )
