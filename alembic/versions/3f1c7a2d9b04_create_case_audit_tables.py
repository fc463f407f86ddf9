"""create_case_audit_tables

Revision ID: 3f1c7a2d9b04
Revises:
Create Date: 2026-10-19 10:12:31.418207

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c7a2d9b04'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'case_queries',
        sa.Column('id', sa.String(64), primary_key=True, comment='Query ID (query_<millis>_<suffix>)'),
        sa.Column('case_type', sa.String(50), nullable=False, comment='Case type key (writ, civil, ...)'),
        sa.Column('case_number', sa.String(50), nullable=False, comment='Case number digits'),
        sa.Column('filing_year', sa.String(10), nullable=False, comment='Filing year'),
        sa.Column('query_timestamp', sa.DateTime(timezone=True), comment='Received at'),
        sa.Column('ip_address', sa.String(255), comment='Client IP from x-forwarded-for'),
    )
    op.create_index('ix_case_queries_case_number', 'case_queries', ['case_number'])

    op.create_table(
        'case_responses',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('query_id', sa.String(64), nullable=False, comment='Related query ID'),
        sa.Column('case_data', sa.Text, comment='Case record as returned to the client'),
        sa.Column('response_timestamp', sa.DateTime(timezone=True), comment='Responded at'),
        sa.Column('success', sa.Boolean, nullable=False),
        sa.Column('error_message', sa.Text, comment='Failure reason'),
    )
    op.create_index('ix_case_responses_query_id', 'case_responses', ['query_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_case_responses_query_id', table_name='case_responses')
    op.drop_table('case_responses')
    op.drop_index('ix_case_queries_case_number', table_name='case_queries')
    op.drop_table('case_queries')
