"""create requirement tables

Revision ID: 3c5e7a9b1d2f
Revises:
Create Date: 2025-03-05 12:00:00
"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '3c5e7a9b1d2f'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'recruitment_sessions',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False, unique=True),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
    )
    op.create_index('ix_recruitment_sessions_status', 'recruitment_sessions', ['status'])

    op.create_table(
        'departments',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('short_code', sa.String(), nullable=False, unique=True),
        sa.Column('name', sa.String(), nullable=False),
    )

    op.create_table(
        'users',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('username', sa.String(), nullable=False),
        sa.Column('first_name', sa.String(), nullable=False),
        sa.Column('last_name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('user_type', sa.String(), nullable=False),
        sa.Column('erp_id', sa.String(), nullable=False),
    )
    op.create_index('ix_users_username', 'users', ['username'])
    op.create_index('ix_users_email', 'users', ['email'])
    op.create_index('ix_users_user_type', 'users', ['user_type'])

    op.create_table(
        'user_departments',
        sa.Column('user_id', sa.String(), sa.ForeignKey('users.id'), primary_key=True),
        sa.Column('dept_short_code', sa.String(), sa.ForeignKey('departments.short_code'), primary_key=True),
    )

    op.create_table(
        'research_requirements',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('session_id', sa.String(), sa.ForeignKey('recruitment_sessions.id'), nullable=False),
        sa.Column('dept_short_code', sa.String(), sa.ForeignKey('departments.short_code'), nullable=False),
        sa.Column('requested_vacancy', sa.JSON(), nullable=False),
        sa.Column('approved_vacancy', sa.JSON(), nullable=False),
        sa.Column('vacancy_status', sa.String(), nullable=False),
        sa.Column('requirement_status', sa.String(), nullable=False),
        sa.Column('remarks', sa.JSON(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('is_archived', sa.Boolean(), nullable=False),
        sa.Column('submitted_on', sa.Date(), nullable=False),
        sa.Column('latest_updated_on', sa.Date(), nullable=False),
    )
    op.create_index('ix_research_requirements_dept_archived', 'research_requirements',
                    ['dept_short_code', 'is_archived'])
    op.create_index('ix_research_requirements_session_dept', 'research_requirements',
                    ['session_id', 'dept_short_code'])
    op.create_index('uq_research_requirements_active', 'research_requirements',
                    ['session_id', 'dept_short_code'], unique=True,
                    sqlite_where=sa.text('is_archived = 0'),
                    postgresql_where=sa.text('is_archived = false'))


def downgrade() -> None:
    op.drop_index('uq_research_requirements_active', table_name='research_requirements')
    op.drop_index('ix_research_requirements_session_dept', table_name='research_requirements')
    op.drop_index('ix_research_requirements_dept_archived', table_name='research_requirements')
    op.drop_table('research_requirements')
    op.drop_table('user_departments')
    op.drop_index('ix_users_user_type', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_username', table_name='users')
    op.drop_table('users')
    op.drop_table('departments')
    op.drop_index('ix_recruitment_sessions_status', table_name='recruitment_sessions')
    op.drop_table('recruitment_sessions')
