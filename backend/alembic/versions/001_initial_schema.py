"""Initial schema — review_cycles, peer_nominations, peer_feedback.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "review_cycles",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("year", sa.Integer, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="DRAFT"),
        sa.Column("self_review_deadline", sa.DateTime(timezone=True), nullable=False),
        sa.Column("peer_feedback_deadline", sa.DateTime(timezone=True), nullable=False),
        sa.Column("manager_evaluation_deadline", sa.DateTime(timezone=True), nullable=False),
        sa.Column("calibration_deadline", sa.DateTime(timezone=True), nullable=False),
        sa.Column("feedback_delivery_deadline", sa.DateTime(timezone=True), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_review_cycles_status", "review_cycles", ["status"])

    op.create_table(
        "peer_nominations",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "cycle_id", UUID(as_uuid=True),
            sa.ForeignKey("review_cycles.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("nominator_id", UUID(as_uuid=True), nullable=False),
        sa.Column("nominee_id", UUID(as_uuid=True), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="PENDING"),
        sa.Column("nominated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint(
            "cycle_id", "nominator_id", "nominee_id",
            name="uq_peer_nominations_cycle_nominator_nominee",
        ),
    )
    op.create_index("ix_peer_nominations_cycle_id", "peer_nominations", ["cycle_id"])
    op.create_index("ix_peer_nominations_nominator_id", "peer_nominations", ["nominator_id"])
    op.create_index("ix_peer_nominations_nominee_id", "peer_nominations", ["nominee_id"])

    op.create_table(
        "peer_feedback",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "cycle_id", UUID(as_uuid=True),
            sa.ForeignKey("review_cycles.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("reviewee_id", UUID(as_uuid=True), nullable=False),
        sa.Column("reviewer_id", UUID(as_uuid=True), nullable=False),
        sa.Column("project_impact", sa.Integer, nullable=False),
        sa.Column("direction", sa.Integer, nullable=False),
        sa.Column("engineering_excellence", sa.Integer, nullable=False),
        sa.Column("operational_ownership", sa.Integer, nullable=False),
        sa.Column("people_impact", sa.Integer, nullable=False),
        sa.Column("strengths", sa.Text, nullable=True),
        sa.Column("growth_areas", sa.Text, nullable=True),
        sa.Column("general_comments", sa.Text, nullable=True),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint(
            "cycle_id", "reviewer_id", "reviewee_id",
            name="uq_peer_feedback_cycle_reviewer_reviewee",
        ),
    )
    op.create_index("ix_peer_feedback_cycle_id", "peer_feedback", ["cycle_id"])
    op.create_index("ix_peer_feedback_reviewee_id", "peer_feedback", ["reviewee_id"])
    op.create_index("ix_peer_feedback_reviewer_id", "peer_feedback", ["reviewer_id"])


def downgrade() -> None:
    op.drop_table("peer_feedback")
    op.drop_table("peer_nominations")
    op.drop_index("ix_review_cycles_status", table_name="review_cycles")
    op.drop_table("review_cycles")
