"""initial schema

Tables are created in dependency order (tests before users, which points at
tests) and dropped in reverse.

Revision ID: 0001
Revises:
Create Date: 2025-09-30
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

JSONType = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    op.create_table(
        "tests",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("test_name", sa.String(255), nullable=False),
        sa.Column("num_questions", sa.Integer),
        sa.Column("duration_minutes", sa.Integer),
        sa.Column("subject_topic", sa.Text),
        sa.Column("instructions", sa.Text),
        sa.Column("test_category", sa.String(100)),
        sa.Column("date_scheduled", sa.TIMESTAMP(timezone=True)),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("email_or_phone", sa.String(255), nullable=False),
        sa.Column("school_name", sa.String(255)),
        sa.Column("dob", sa.Date),
        sa.Column("gender", sa.String(32)),
        sa.Column("mobile_number", sa.String(32)),
        sa.Column("city", sa.String(120)),
        sa.Column("state", sa.String(120)),
        sa.Column("country", sa.String(120)),
        sa.Column("is_paid", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("assigned_testid", sa.Integer, sa.ForeignKey("tests.id", ondelete="SET NULL")),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_users_email_or_phone", "users", ["email_or_phone"], unique=True)

    op.create_table(
        "otps",
        sa.Column("email", sa.String(255), primary_key=True),
        sa.Column("otp", sa.String(6), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "questions",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("test_id", sa.Integer, sa.ForeignKey("tests.id", ondelete="CASCADE"), nullable=False),
        sa.Column("question_text", sa.Text, nullable=False),
        sa.Column("options", JSONType, nullable=False),
        sa.Column("correct_option", sa.String(255), nullable=False),
        sa.Column("marks", sa.Integer, nullable=False, server_default="1"),
        sa.Column("image_url", sa.String(255)),
    )
    op.create_index("ix_questions_test_id", "questions", ["test_id"])

    op.create_table(
        "results",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("test_id", sa.Integer, sa.ForeignKey("tests.id", ondelete="CASCADE"), nullable=False),
        sa.Column("score", sa.Integer, nullable=False),
        sa.Column("highest_score", sa.Integer),
        sa.Column("submitted_at", sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_results_user_test", "results", ["user_id", "test_id"])

    op.create_table(
        "test_bundles",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("bundle_name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("price", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("features", JSONType),
        sa.Column("image_url", sa.String(255)),
        sa.Column("category", sa.String(100)),
    )
    op.create_index("ix_test_bundles_slug", "test_bundles", ["slug"], unique=True)


def downgrade() -> None:
    op.drop_table("test_bundles")
    op.drop_table("results")
    op.drop_table("questions")
    op.drop_table("otps")
    op.drop_table("users")
    op.drop_table("tests")
