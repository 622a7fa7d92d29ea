"""Initial schema: role directory, approval requests, finance, inventory, events

Revision ID: 3f9a1c2b7d40
Revises:
Create Date: 2026-10-19 09:12:41.118204

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f9a1c2b7d40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def _approval_stamp() -> list[sa.Column]:
    return [
        sa.Column("approved", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("approval_request_id", sa.String(), nullable=True),
    ]


def upgrade() -> None:
    """Create initial schema."""
    # Role directory
    op.create_table(
        "role_assignment",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("actor_id", sa.String(), nullable=False),
        sa.Column("role", sa.String(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("assigned_by", sa.String(), nullable=True),
        sa.Column(
            "assigned_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("deactivated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("deactivated_by", sa.String(), nullable=True),
        sa.CheckConstraint(
            "role IN ('president', 'treasurer', 'vice_president', "
            "'activity_director', 'advisor')",
            name="role_assignment_role_check",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_role_assignment_actor_id"), "role_assignment", ["actor_id"]
    )
    op.create_index(
        "uq_role_assignment_active_actor",
        "role_assignment",
        ["actor_id"],
        unique=True,
        postgresql_where=sa.text("is_active"),
    )

    # Approval ledger
    op.create_table(
        "approval_request",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("request_type", sa.String(), nullable=False),
        sa.Column("requester_id", sa.String(), nullable=False),
        sa.Column("payload", sa.JSON(), nullable=False),
        sa.Column("justification", sa.Text(), nullable=True),
        sa.Column("target_ref", sa.String(), nullable=True),
        sa.Column("status", sa.String(), nullable=False, server_default="pending"),
        sa.Column("reviewer_id", sa.String(), nullable=True),
        sa.Column("reviewer_note", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("resolved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("executed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("execution_error", sa.Text(), nullable=True),
        sa.CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name="approval_request_status_check",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_approval_request_requester_id"), "approval_request", ["requester_id"]
    )
    op.create_index(
        "ix_approval_request_status_created",
        "approval_request",
        ["status", "created_at"],
    )

    # Finance
    op.create_table(
        "finance_record",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("type", sa.String(), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=False, server_default=""),
        sa.Column("recorded_by", sa.String(), nullable=True),
        *_approval_stamp(),
        *_timestamps(),
        sa.CheckConstraint(
            "type IN ('income', 'expense')", name="finance_record_type_check"
        ),
        sa.CheckConstraint("amount > 0", name="finance_record_amount_positive"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_finance_record_type"), "finance_record", ["type"])
    op.create_index(
        op.f("ix_finance_record_approval_request_id"),
        "finance_record",
        ["approval_request_id"],
    )

    # Inventory
    op.create_table(
        "inventory_item",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("category", sa.String(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("unit", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("purchase_date", sa.Date(), nullable=True),
        sa.Column("price", sa.Numeric(12, 2), nullable=True),
        sa.Column("last_modified_by", sa.String(), nullable=True),
        *_approval_stamp(),
        *_timestamps(),
        sa.CheckConstraint(
            "category IN ('fixed_asset', 'consumable')",
            name="inventory_item_category_check",
        ),
        sa.CheckConstraint("quantity >= 0", name="inventory_item_quantity_check"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_inventory_item_category"), "inventory_item", ["category"])
    op.create_index(
        op.f("ix_inventory_item_approval_request_id"),
        "inventory_item",
        ["approval_request_id"],
    )

    # Events
    op.create_table(
        "club_event",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("type", sa.String(), nullable=False),
        sa.Column("status", sa.String(), nullable=False, server_default="open"),
        sa.Column("registration_link", sa.String(), nullable=True),
        sa.Column("created_by", sa.String(), nullable=True),
        *_approval_stamp(),
        *_timestamps(),
        sa.CheckConstraint(
            "type IN ('group_play', 'competition', 'other')",
            name="club_event_type_check",
        ),
        sa.CheckConstraint("status IN ('open', 'ended')", name="club_event_status_check"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_club_event_type"), "club_event", ["type"])
    op.create_index(op.f("ix_club_event_status"), "club_event", ["status"])
    op.create_index(
        op.f("ix_club_event_approval_request_id"),
        "club_event",
        ["approval_request_id"],
    )

    op.create_table(
        "event_group",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("event_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("claimed", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("share_link", sa.String(), nullable=True),
        sa.Column("checkin_img", sa.String(), nullable=True),
        sa.Column("ticket_count", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("capacity_per_ticket", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["event_id"], ["club_event.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_event_group_event_id"), "event_group", ["event_id"])

    op.create_table(
        "event_ticket",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("group_id", sa.String(), nullable=False),
        sa.Column("ticket_number", sa.Integer(), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("claimed", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("qr_code_url", sa.String(), nullable=True),
        sa.ForeignKeyConstraint(["group_id"], ["event_group.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("group_id", "ticket_number", name="uq_event_ticket_number"),
    )
    op.create_index(op.f("ix_event_ticket_group_id"), "event_ticket", ["group_id"])

    op.create_table(
        "registration",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("event_id", sa.String(), nullable=False),
        sa.Column("group_id", sa.String(), nullable=False),
        sa.Column("actor_id", sa.String(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["event_id"], ["club_event.id"]),
        sa.ForeignKeyConstraint(["group_id"], ["event_group.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_registration_event_id"), "registration", ["event_id"])
    op.create_index(op.f("ix_registration_group_id"), "registration", ["group_id"])


def downgrade() -> None:
    """Drop all tables (reverse dependency order)."""
    op.drop_table("registration")
    op.drop_table("event_ticket")
    op.drop_table("event_group")
    op.drop_table("club_event")
    op.drop_table("inventory_item")
    op.drop_table("finance_record")
    op.drop_table("approval_request")
    op.drop_index("uq_role_assignment_active_actor", table_name="role_assignment")
    op.drop_table("role_assignment")
