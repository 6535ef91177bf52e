"""initial schema: users, draws, draw slots, predictions

Revision ID: 0001
Revises:
Create Date: 2026-10-16
"""

from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

ID_TYPE = sa.BigInteger().with_variant(sa.Integer, "sqlite")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", ID_TYPE, autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("email", sa.String(length=100), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_users")),
        sa.UniqueConstraint("username", name=op.f("uq_users_username")),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "draws",
        sa.Column("id", ID_TYPE, autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("event", sa.String(length=100), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("size", sa.Integer(), nullable=False),
        sa.Column("prediction_close", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_draws")),
    )

    op.create_table(
        "draw_slots",
        sa.Column("id", ID_TYPE, autoincrement=True, nullable=False),
        sa.Column("draw_id", ID_TYPE, nullable=False),
        sa.Column("round", sa.Integer(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), server_default="", nullable=False),
        sa.Column("seed", sa.String(length=20), server_default="", nullable=False),
        sa.ForeignKeyConstraint(
            ["draw_id"], ["draws.id"],
            name=op.f("fk_draw_slots_draw_id_draws"), ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_draw_slots")),
        sa.UniqueConstraint("draw_id", "round", "position", name="uq_draw_slot_cell"),
    )
    op.create_index(op.f("ix_draw_slots_draw_id"), "draw_slots", ["draw_id"])
    op.create_index("ix_draw_slots_draw_round", "draw_slots", ["draw_id", "round"])

    op.create_table(
        "predictions",
        sa.Column("id", ID_TYPE, autoincrement=True, nullable=False),
        sa.Column("user_id", ID_TYPE, nullable=False),
        sa.Column("draw_slot_id", ID_TYPE, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("size", sa.Integer(), nullable=False),
        sa.Column("round", sa.Integer(), nullable=False),
        sa.Column("points", sa.Integer(), server_default="0", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["draw_slot_id"], ["draw_slots.id"],
            name=op.f("fk_predictions_draw_slot_id_draw_slots"), ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"],
            name=op.f("fk_predictions_user_id_users"), ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_predictions")),
    )
    op.create_index(op.f("ix_predictions_draw_slot_id"), "predictions", ["draw_slot_id"])
    op.create_index(op.f("ix_predictions_user_id"), "predictions", ["user_id"])


def downgrade() -> None:
    op.drop_index(op.f("ix_predictions_user_id"), table_name="predictions")
    op.drop_index(op.f("ix_predictions_draw_slot_id"), table_name="predictions")
    op.drop_table("predictions")
    op.drop_index("ix_draw_slots_draw_round", table_name="draw_slots")
    op.drop_index(op.f("ix_draw_slots_draw_id"), table_name="draw_slots")
    op.drop_table("draw_slots")
    op.drop_table("draws")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")
