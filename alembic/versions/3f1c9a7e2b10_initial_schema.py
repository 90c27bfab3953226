"""initial_schema

Revision ID: 3f1c9a7e2b10
Revises:
Create Date: 2026-10-19 00:00:00.000000

Creates the users -> farmers -> farms ownership chain, the crop, equipment,
sale and fertilization tables hanging off it, and the three PostgreSQL enum
types they use.  Child foreign keys are ON DELETE RESTRICT.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3f1c9a7e2b10"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

# ── Enum type names (PostgreSQL CREATE TYPE) ────────────────────────────────
ENUM_GENDER = postgresql.ENUM("male", "female", name="gender", create_type=False)
ENUM_CROP_STATUS = postgresql.ENUM(
    "planted", "growing", "harvested", name="crop_status", create_type=False
)
ENUM_EQUIPMENT_CONDITION = postgresql.ENUM(
    "new", "good", "fair", "poor", name="equipment_condition", create_type=False
)


def _id_column() -> sa.Column:
    return sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False)


def upgrade() -> None:
    # ── 1. Create enum types ────────────────────────────────────────────
    ENUM_GENDER.create(op.get_bind(), checkfirst=True)
    ENUM_CROP_STATUS.create(op.get_bind(), checkfirst=True)
    ENUM_EQUIPMENT_CONDITION.create(op.get_bind(), checkfirst=True)

    # ── 2. Accounts ─────────────────────────────────────────────────────

    # users
    op.create_table(
        "users",
        _id_column(),
        sa.Column("fullname", sa.String(255), nullable=False),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("password", sa.String(128), nullable=False),
        sa.Column("image_photo", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column("address", sa.String(255), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # ── 3. Ownership chain ──────────────────────────────────────────────

    # farmers
    op.create_table(
        "farmers",
        _id_column(),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("gender", ENUM_GENDER, nullable=False),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("address", sa.String(255), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_farmers_user_id", "farmers", ["user_id"])
    op.create_index("ix_farmers_email", "farmers", ["email"])

    # farms
    op.create_table(
        "farms",
        _id_column(),
        sa.Column("farmer_id", sa.BigInteger(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("size_acres", sa.Numeric(12, 2), nullable=False),
        sa.Column(
            "irrigation",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        sa.Column("gps_coordinates", sa.String(100), nullable=True),
        sa.ForeignKeyConstraint(["farmer_id"], ["farmers.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_farms_farmer_id", "farms", ["farmer_id"])

    # ── 4. Farm records ─────────────────────────────────────────────────

    # crops
    op.create_table(
        "crops",
        _id_column(),
        sa.Column("farm_id", sa.BigInteger(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("variety", sa.String(255), nullable=True),
        sa.Column("planting_date", sa.Date(), nullable=True),
        sa.Column("expected_harvest_date", sa.Date(), nullable=True),
        sa.Column(
            "status",
            ENUM_CROP_STATUS,
            server_default=sa.text("'planted'"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["farm_id"], ["farms.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_crops_farm_id", "crops", ["farm_id"])

    # equipment
    op.create_table(
        "equipment",
        _id_column(),
        sa.Column("farm_id", sa.BigInteger(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("purchase_date", sa.Date(), nullable=True),
        sa.Column("condition", ENUM_EQUIPMENT_CONDITION, nullable=True),
        sa.Column(
            "is_operational",
            sa.Boolean(),
            server_default=sa.text("true"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["farm_id"], ["farms.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_equipment_farm_id", "equipment", ["farm_id"])

    # sales
    op.create_table(
        "sales",
        _id_column(),
        sa.Column("farm_id", sa.BigInteger(), nullable=False),
        sa.Column("product_type", sa.String(100), nullable=False),
        sa.Column("product_name", sa.String(255), nullable=True),
        sa.Column("quantity", sa.Numeric(12, 2), nullable=True),
        sa.Column("unit", sa.String(32), nullable=True),
        sa.Column("price_per_unit", sa.Numeric(12, 2), nullable=True),
        sa.Column("sale_date", sa.Date(), nullable=True),
        sa.Column("buyer_name", sa.String(255), nullable=True),
        sa.ForeignKeyConstraint(["farm_id"], ["farms.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_sales_farm_id", "sales", ["farm_id"])

    # fertilizations
    op.create_table(
        "fertilizations",
        _id_column(),
        sa.Column("crop_id", sa.BigInteger(), nullable=False),
        sa.Column("date", sa.Date(), nullable=True),
        sa.Column("type", sa.String(255), nullable=True),
        sa.Column("quantity_kg", sa.Numeric(12, 2), nullable=True),
        sa.ForeignKeyConstraint(["crop_id"], ["crops.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_fertilizations_crop_id", "fertilizations", ["crop_id"])


def downgrade() -> None:
    # ── Drop tables in reverse dependency order ─────────────────────────
    op.drop_table("fertilizations")
    op.drop_table("sales")
    op.drop_table("equipment")
    op.drop_table("crops")
    op.drop_table("farms")
    op.drop_table("farmers")
    op.drop_table("users")

    # ── Drop enum types ─────────────────────────────────────────────────
    ENUM_EQUIPMENT_CONDITION.drop(op.get_bind(), checkfirst=True)
    ENUM_CROP_STATUS.drop(op.get_bind(), checkfirst=True)
    ENUM_GENDER.drop(op.get_bind(), checkfirst=True)
