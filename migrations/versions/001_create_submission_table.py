"""Create submission table

Revision ID: 001
Revises:
Create Date: 2026-10-18 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    """Create submission table with the unique retrieval token."""

    op.create_table(
        'submission',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('token', sa.Text(), nullable=False),
        sa.Column('artifact_path', sa.Text(), nullable=False),
        sa.Column('artist_name', sa.Text(), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('creation_date', sa.Text(), nullable=False),
        sa.Column('medium', sa.Text(), nullable=False),
        sa.Column('dimensions', sa.Text(), nullable=False),
        sa.Column('edition_size', sa.Text(), nullable=True),
        sa.Column('provenance', sa.Text(), nullable=True),
        sa.Column('exhibition_history', sa.Text(), nullable=True),
        sa.Column('purchase_price', sa.Text(), nullable=True),
        sa.Column('appraisal', sa.Text(), nullable=True),
        sa.Column('estimate_low', sa.Text(), nullable=True),
        sa.Column('estimate_high', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_submission'),
        sa.UniqueConstraint('token', name='uq_submission_token'),
    )

    # Operator console lists newest first
    op.create_index('ix_submission_created_at', 'submission', ['created_at'])


def downgrade():
    """Drop submission table."""
    op.drop_index('ix_submission_created_at', table_name='submission')
    op.drop_table('submission')
