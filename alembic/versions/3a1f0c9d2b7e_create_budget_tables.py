"""create budget tables

Revision ID: 3a1f0c9d2b7e
Revises:
Create Date: 2026-10-19 10:02:11.481337

Base schema: customers, building materials with thickness price tiers,
bags and budgets. Skips tables that Base.metadata.create_all() already made.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3a1f0c9d2b7e'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _table_exists(table_name):
    """Check if a table exists."""
    bind = op.get_bind()
    insp = sa.inspect(bind)
    return table_name in insp.get_table_names()


def upgrade() -> None:
    if not _table_exists("customers"):
        op.create_table(
            "customers",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("company", sa.String(), nullable=True),
            sa.Column("email", sa.String(), nullable=True),
            sa.Column("phone", sa.String(), nullable=True),
            sa.Column("address", sa.Text(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_customers_id", "customers", ["id"])

    if not _table_exists("building_materials"):
        op.create_table(
            "building_materials",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("reference_unit_price", sa.Float(), nullable=False),
            sa.Column("updated_at", sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("name"),
        )
        op.create_index("ix_building_materials_id", "building_materials", ["id"])

    if not _table_exists("material_thickness_prices"):
        op.create_table(
            "material_thickness_prices",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("building_material_id", sa.Integer(), nullable=False),
            sa.Column("thickness_mm", sa.Integer(), nullable=False),
            sa.Column("unit_price", sa.Float(), nullable=False),
            sa.ForeignKeyConstraint(["building_material_id"], ["building_materials.id"]),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_material_thickness_prices_id", "material_thickness_prices", ["id"])

    if not _table_exists("bags"):
        op.create_table(
            "bags",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("building_material_id", sa.Integer(), nullable=False),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("weight_kg", sa.Float(), nullable=True),
            sa.ForeignKeyConstraint(["building_material_id"], ["building_materials.id"]),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_bags_id", "bags", ["id"])
        op.create_index("ix_bags_building_material_id", "bags", ["building_material_id"])

    if not _table_exists("budgets"):
        op.create_table(
            "budgets",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("customer_id", sa.Integer(), nullable=False),
            sa.Column("bag_id", sa.Integer(), nullable=False),
            sa.Column("layer_thickness", sa.Integer(), nullable=False),
            sa.Column("area_to_cover", sa.Float(), nullable=False),
            sa.Column("price", sa.Float(), nullable=False),
            sa.Column("totally_bags_quantity", sa.Float(), nullable=False),
            sa.Column("expiration_date", sa.DateTime(), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=True),
            sa.ForeignKeyConstraint(["customer_id"], ["customers.id"]),
            sa.ForeignKeyConstraint(["bag_id"], ["bags.id"]),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_budgets_id", "budgets", ["id"])


def downgrade() -> None:
    for table_name in ["budgets", "bags", "material_thickness_prices",
                       "building_materials", "customers"]:
        if _table_exists(table_name):
            op.drop_table(table_name)
