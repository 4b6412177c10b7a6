"""Initial rabbitry schema

Revision ID: 3f1c9a7e2b10
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7e2b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(updated: bool = True) -> list[sa.Column]:
    columns = [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]
    if updated:
        columns.append(
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False)
        )
    return columns


def upgrade() -> None:
    """Create farm, herd, housing, breeding, finance and health tables."""

    # --- farms ---
    op.create_table(
        'farms',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('owner_user_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('timezone', sa.String(length=64), nullable=False),
        sa.Column('gestation_days', sa.Integer(), nullable=False),
        sa.Column('palpation_days', sa.Integer(), nullable=False),
        sa.Column('weaning_days', sa.Integer(), nullable=False),
        sa.Column('breeds', postgresql.JSONB(), nullable=False),
        sa.Column('tag_prefix', sa.String(length=4), nullable=False),
        sa.Column('capacity_policy', sa.String(length=8), nullable=False, server_default='soft'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_farms'),
        sa.UniqueConstraint('owner_user_id', name='uq_farms_owner_user_id'),
    )
    op.create_table(
        'tag_counters',
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('last_sequence', sa.Integer(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('farm_id', name='pk_tag_counters'),
    )

    # --- hutches ---
    op.create_table(
        'hutches',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('number', sa.Integer(), nullable=False),
        sa.Column('code', sa.String(length=16), nullable=False),
        sa.Column('label', sa.String(length=255), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('current_occupancy', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('accessories', postgresql.ARRAY(sa.String()), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_hutches'),
        sa.UniqueConstraint('farm_id', 'number', name='ux_hutches_farm_number'),
        sa.CheckConstraint('current_occupancy >= 0', name='ck_hutches_occupancy_non_negative'),
    )
    op.create_index('ix_hutches_farm_id', 'hutches', ['farm_id'], unique=False)

    # --- animals ---
    op.create_table(
        'animals',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('tag', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('breed', sa.String(length=64), nullable=False),
        sa.Column('sex', sa.String(length=6), nullable=False),
        sa.Column('source', sa.String(length=16), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('date_of_acquisition', sa.Date(), nullable=True),
        sa.Column('purchase_cost', sa.Numeric(12, 2), nullable=True),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.Column('current_hutch_id', sa.Uuid(), nullable=True),
        sa.Column('sire_tag', sa.String(length=64), nullable=True),
        sa.Column('doe_tag', sa.String(length=64), nullable=True),
        sa.Column('weight', sa.Numeric(8, 3), nullable=True),
        sa.Column('notes', sa.Text(), nullable=False, server_default=''),
        *_timestamps(),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.PrimaryKeyConstraint('id', name='pk_animals'),
        sa.ForeignKeyConstraint(
            ['current_hutch_id'], ['hutches.id'], name='fk_animals_current_hutch_id_hutches'
        ),
        sa.UniqueConstraint('farm_id', 'tag', name='ux_animals_farm_tag'),
    )
    for column in ('farm_id', 'status', 'current_hutch_id', 'sire_tag', 'doe_tag'):
        op.create_index(f'ix_animals_{column}', 'animals', [column], unique=False)

    # --- hutch_assignments ---
    op.create_table(
        'hutch_assignments',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('animal_id', sa.Uuid(), nullable=False),
        sa.Column('hutch_id', sa.Uuid(), nullable=False),
        sa.Column('hutch_label', sa.String(length=255), nullable=False),
        sa.Column('start_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('purpose', sa.String(length=16), nullable=False),
        sa.Column('notes', sa.Text(), nullable=False, server_default=''),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id', name='pk_hutch_assignments'),
        sa.ForeignKeyConstraint(
            ['animal_id'], ['animals.id'], name='fk_hutch_assignments_animal_id_animals'
        ),
    )
    op.create_index('ix_hutch_assignments_farm_id', 'hutch_assignments', ['farm_id'], unique=False)
    op.create_index('ix_hutch_assignments_hutch_id', 'hutch_assignments', ['hutch_id'], unique=False)
    op.create_index(
        'ix_hutch_assignments_farm_animal_end',
        'hutch_assignments',
        ['farm_id', 'animal_id', 'end_at'],
        unique=False,
    )

    # --- matings / deliveries ---
    op.create_table(
        'matings',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('doe_tag', sa.String(length=64), nullable=False),
        sa.Column('sire_tag', sa.String(length=64), nullable=False),
        sa.Column('mating_date', sa.Date(), nullable=False),
        sa.Column('expected_palpation_date', sa.Date(), nullable=False),
        sa.Column('expected_delivery_date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('palpation_result', sa.String(length=16), nullable=True),
        sa.Column('palpation_checked_on', sa.Date(), nullable=True),
        sa.Column('actual_delivery_date', sa.Date(), nullable=True),
        sa.Column('kits_born', sa.Integer(), nullable=True),
        sa.Column('kits_live', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_matings'),
    )
    for column in ('farm_id', 'doe_tag', 'sire_tag', 'status'):
        op.create_index(f'ix_matings_{column}', 'matings', [column], unique=False)

    op.create_table(
        'deliveries',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('mating_id', sa.Uuid(), nullable=False),
        sa.Column('doe_tag', sa.String(length=64), nullable=False),
        sa.Column('sire_tag', sa.String(length=64), nullable=False),
        sa.Column('delivery_date', sa.Date(), nullable=False),
        sa.Column('kits_born', sa.Integer(), nullable=False),
        sa.Column('kits_live', sa.Integer(), nullable=False),
        sa.Column('kit_ids', postgresql.ARRAY(sa.String()), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id', name='pk_deliveries'),
        sa.ForeignKeyConstraint(['mating_id'], ['matings.id'], name='fk_deliveries_mating_id_matings'),
        sa.UniqueConstraint('mating_id', name='uq_deliveries_mating_id'),
    )
    op.create_index('ix_deliveries_farm_id', 'deliveries', ['farm_id'], unique=False)

    # --- finance ---
    op.create_table(
        'transactions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('type', sa.String(length=16), nullable=False),
        sa.Column('category', sa.String(length=64), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=False, server_default=''),
        sa.Column('related_id', sa.Uuid(), nullable=True),
        sa.Column('related_tags', postgresql.ARRAY(sa.String()), nullable=False),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id', name='pk_transactions'),
    )
    op.create_index('ix_transactions_farm_id', 'transactions', ['farm_id'], unique=False)
    op.create_index('ix_transactions_date', 'transactions', ['date'], unique=False)

    op.create_table(
        'sales',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('code', sa.String(length=32), nullable=False),
        sa.Column('animal_ids', postgresql.ARRAY(sa.String()), nullable=False),
        sa.Column('animal_tags', postgresql.ARRAY(sa.String()), nullable=False),
        sa.Column('buyer_name', sa.String(length=255), nullable=False),
        sa.Column('customer_id', sa.Uuid(), nullable=True),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id', name='pk_sales'),
    )
    op.create_index('ix_sales_farm_id', 'sales', ['farm_id'], unique=False)

    op.create_table(
        'customers',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=64), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('total_spent', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('last_purchase_date', sa.Date(), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id', name='pk_customers'),
    )
    op.create_index('ix_customers_farm_id', 'customers', ['farm_id'], unique=False)

    # --- health ---
    op.create_table(
        'medical_records',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('animal_id', sa.Uuid(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('type', sa.String(length=32), nullable=False),
        sa.Column('medication_name', sa.String(length=255), nullable=False),
        sa.Column('dosage', sa.String(length=64), nullable=True),
        sa.Column('cost', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('next_due_date', sa.Date(), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id', name='pk_medical_records'),
        sa.ForeignKeyConstraint(
            ['animal_id'], ['animals.id'], name='fk_medical_records_animal_id_animals'
        ),
    )
    op.create_index('ix_medical_records_farm_id', 'medical_records', ['farm_id'], unique=False)
    op.create_index('ix_medical_records_animal_id', 'medical_records', ['animal_id'], unique=False)

    op.create_table(
        'weight_records',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('animal_id', sa.Uuid(), nullable=False),
        sa.Column('weight', sa.Numeric(8, 3), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('age_label', sa.String(length=64), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id', name='pk_weight_records'),
        sa.ForeignKeyConstraint(
            ['animal_id'], ['animals.id'], name='fk_weight_records_animal_id_animals'
        ),
    )
    op.create_index('ix_weight_records_farm_id', 'weight_records', ['farm_id'], unique=False)
    op.create_index('ix_weight_records_animal_id', 'weight_records', ['animal_id'], unique=False)


def downgrade() -> None:
    """Drop every rabbitry table."""
    for table in (
        'weight_records',
        'medical_records',
        'customers',
        'sales',
        'transactions',
        'deliveries',
        'matings',
        'hutch_assignments',
        'animals',
        'hutches',
        'tag_counters',
        'farms',
    ):
        op.drop_table(table)
