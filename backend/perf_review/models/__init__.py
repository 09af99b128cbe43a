"""ORM Models — SQLAlchemy declarative models for persisted review entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - ReviewCycle is the aggregate root; nominations and feedback scoped by cycle_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from perf_review.models.review_cycle import ReviewCycle  # noqa: F401
from perf_review.models.peer_nomination import PeerNomination  # noqa: F401
from perf_review.models.peer_feedback import PeerFeedback  # noqa: F401
