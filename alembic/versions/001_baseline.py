"""baseline schema - barbershops, bookings and commission tables

Revision ID: 001_baseline
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

revision = '001_baseline'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Barbershops (tenants)
    op.create_table('barbershops',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('slug', sa.String(100), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_barbershops_slug', 'barbershops', ['slug'], unique=True)

    # Professionals
    op.create_table('professionals',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('barbershop_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('photo_url', sa.String(500), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('commission_percentage', sa.Numeric(5, 2), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['barbershop_id'], ['barbershops.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_professionals_barbershop_id', 'professionals', ['barbershop_id'])

    # Bookings
    op.create_table('bookings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('barbershop_id', sa.Integer(), nullable=False),
        sa.Column('professional_id', sa.Integer(), nullable=True),
        sa.Column('booking_date', sa.Date(), nullable=False),
        sa.Column('booking_time', sa.Time(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('price', sa.Numeric(12, 2), nullable=True),
        sa.Column('total_price', sa.Numeric(12, 2), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['barbershop_id'], ['barbershops.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['professional_id'], ['professionals.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_bookings_barbershop_id', 'bookings', ['barbershop_id'])
    op.create_index('ix_bookings_professional_id', 'bookings', ['professional_id'])
    op.create_index('ix_bookings_booking_date', 'bookings', ['booking_date'])
    op.create_index('ix_bookings_status', 'bookings', ['status'])

    # Current commission rate per professional
    op.create_table('professional_commissions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('barbershop_id', sa.Integer(), nullable=False),
        sa.Column('professional_id', sa.Integer(), nullable=False),
        sa.Column('commission_rate', sa.Numeric(5, 2), nullable=False, server_default='50'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['barbershop_id'], ['barbershops.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['professional_id'], ['professionals.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('professional_id', 'barbershop_id', name='uq_professional_commissions_pro_shop')
    )
    op.create_index('ix_professional_commissions_barbershop_id', 'professional_commissions', ['barbershop_id'])

    # Rate change history
    op.create_table('commission_rate_history',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('barbershop_id', sa.Integer(), nullable=False),
        sa.Column('professional_id', sa.Integer(), nullable=False),
        sa.Column('old_rate_percent', sa.Numeric(5, 2), nullable=True),
        sa.Column('new_rate_percent', sa.Numeric(5, 2), nullable=False),
        sa.Column('changed_by_user_id', sa.Integer(), nullable=True),
        sa.Column('changed_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['barbershop_id'], ['barbershops.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['professional_id'], ['professionals.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_commission_rate_history_barbershop_id', 'commission_rate_history', ['barbershop_id'])
    op.create_index('ix_commission_rate_history_professional_id', 'commission_rate_history', ['professional_id'])
    op.create_index('ix_commission_rate_history_changed_at', 'commission_rate_history', ['changed_at'])

    # Payout ledger
    op.create_table('commission_payments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('barbershop_id', sa.Integer(), nullable=False),
        sa.Column('professional_id', sa.Integer(), nullable=False),
        sa.Column('period_start', sa.Date(), nullable=False),
        sa.Column('period_end', sa.Date(), nullable=False),
        sa.Column('gross_amount', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('commission_rate', sa.Numeric(5, 2), nullable=False),
        sa.Column('commission_amount', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('paid_at', sa.DateTime(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['barbershop_id'], ['barbershops.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['professional_id'], ['professionals.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_commission_payments_barbershop_id', 'commission_payments', ['barbershop_id'])
    op.create_index('ix_commission_payments_professional_id', 'commission_payments', ['professional_id'])
    op.create_index('ix_commission_payments_status', 'commission_payments', ['status'])

    # Per-sale commission items
    op.create_table('commission_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('barbershop_id', sa.Integer(), nullable=False),
        sa.Column('professional_id', sa.Integer(), nullable=False),
        sa.Column('booking_id', sa.Integer(), nullable=True),
        sa.Column('source_type', sa.String(20), nullable=False, server_default='APPOINTMENT'),
        sa.Column('occurred_at', sa.DateTime(), nullable=False),
        sa.Column('gross_amount', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('applied_commission_rate', sa.Numeric(5, 2), nullable=False),
        sa.Column('commission_amount', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('payment_status', sa.String(20), nullable=False, server_default='PENDING'),
        sa.Column('paid_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['barbershop_id'], ['barbershops.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['professional_id'], ['professionals.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['booking_id'], ['bookings.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_commission_items_barbershop_id', 'commission_items', ['barbershop_id'])
    op.create_index('ix_commission_items_professional_id', 'commission_items', ['professional_id'])
    op.create_index('ix_commission_items_occurred_at', 'commission_items', ['occurred_at'])
    op.create_index('ix_commission_items_payment_status', 'commission_items', ['payment_status'])

    # Bulk payment log
    op.create_table('commission_payment_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('barbershop_id', sa.Integer(), nullable=False),
        sa.Column('professional_id', sa.Integer(), nullable=True),
        sa.Column('commission_item_ids', sa.JSON(), nullable=False),
        sa.Column('paid_by_user_id', sa.Integer(), nullable=True),
        sa.Column('note', sa.Text(), nullable=True),
        sa.Column('paid_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['barbershop_id'], ['barbershops.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['professional_id'], ['professionals.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_commission_payment_logs_barbershop_id', 'commission_payment_logs', ['barbershop_id'])


def downgrade():
    op.drop_table('commission_payment_logs')
    op.drop_table('commission_items')
    op.drop_table('commission_payments')
    op.drop_table('commission_rate_history')
    op.drop_table('professional_commissions')
    op.drop_table('bookings')
    op.drop_table('professionals')
    op.drop_table('barbershops')
