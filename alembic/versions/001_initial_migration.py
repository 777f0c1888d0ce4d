"""Initial migration

Revision ID: 001
Revises: 
Create Date: 2024-01-01 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create pos_configurations table
    op.create_table('pos_configurations',
        sa.Column('code', sa.String(length=10), nullable=False),
        sa.Column('model', sa.String(length=10), nullable=False),
        sa.Column('merchant_code', sa.String(length=20), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('code', 'model'),
        comment='Point-of-sale terminal identity and merchant registration'
    )

    # Create transactions table
    op.create_table('transactions',
        sa.Column('id', sa.Integer(), nullable=False, autoincrement=True),
        sa.Column('unique_code', sa.String(length=64), nullable=False),
        sa.Column('amount', sa.Numeric(precision=19, scale=2), nullable=False),
        sa.Column('brand', sa.String(length=4), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False, server_default='USD'),
        sa.Column('type', sa.String(length=20), nullable=False, server_default='PAYMENT'),
        sa.Column('modality', sa.String(length=20), nullable=False, server_default='SIMPLE'),
        sa.Column('state', sa.String(length=20), nullable=False, server_default='SUBMITTED'),
        sa.Column('receipt_state', sa.String(length=20), nullable=False, server_default='PENDING'),
        sa.Column('detail', sa.Text(), nullable=False),
        sa.Column('deferred_interest', sa.Boolean(), nullable=True),
        sa.Column('installments', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('amount > 0', name='positive_amount'),
        sa.CheckConstraint("state IN ('SUBMITTED', 'AUTHORIZED', 'REJECTED')", name='transaction_state_check'),
        sa.CheckConstraint("receipt_state IN ('PENDING', 'PRINTED')", name='receipt_state_check'),
        comment='POS payment transactions'
    )

    # Create indexes for transactions
    op.create_index(op.f('ix_transactions_unique_code'), 'transactions', ['unique_code'], unique=True)
    op.create_index(op.f('ix_transactions_state'), 'transactions', ['state'], unique=False)
    op.create_index(op.f('ix_transactions_created_at'), 'transactions', ['created_at'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_transactions_created_at'), table_name='transactions')
    op.drop_index(op.f('ix_transactions_state'), table_name='transactions')
    op.drop_index(op.f('ix_transactions_unique_code'), table_name='transactions')
    op.drop_table('transactions')
    op.drop_table('pos_configurations')
