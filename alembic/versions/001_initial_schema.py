"""Initial recruiters, companies and jobs tables

Revision ID: 001
Revises:
Create Date: 2025-06-02

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JOB_TYPES = ('Full-time', 'Part-time', 'Contract', 'Temporary', 'Permanent', 'Internship')
WORK_POLICIES = ('Remote', 'Hybrid', 'On-site')
EXPERIENCE_LEVELS = ('Junior', 'Mid-level', 'Senior')


def upgrade() -> None:
    op.create_table(
        'recruiters',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_recruiters_email', 'recruiters', ['email'], unique=True)

    op.create_table(
        'companies',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('slug', sa.String(255), nullable=False),
        sa.Column('recruiter_id', sa.Uuid(), sa.ForeignKey('recruiters.id'), nullable=False, unique=True),

        # Branding
        sa.Column('logo_url', sa.String(500), nullable=False, server_default=''),
        sa.Column('banner_url', sa.String(500), nullable=False, server_default=''),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('social_links_json', sa.JSON(), nullable=True),

        # Page documents
        sa.Column('theme_json', sa.JSON(), nullable=True),
        sa.Column('content_json', sa.JSON(), nullable=True),
        sa.Column('sections_json', sa.JSON(), nullable=True),

        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
    )
    op.create_index('ix_companies_slug', 'companies', ['slug'], unique=True)

    op.create_table(
        'jobs',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('company_id', sa.Uuid(), sa.ForeignKey('companies.id'), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('location', sa.String(255), nullable=False),
        sa.Column('job_type', sa.Enum(*JOB_TYPES, name='jobtype'), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('work_policy', sa.Enum(*WORK_POLICIES, name='workpolicy'), nullable=False),
        sa.Column('department', sa.String(120), nullable=True),
        sa.Column('experience_level', sa.Enum(*EXPERIENCE_LEVELS, name='experiencelevel'), nullable=False),
        sa.Column('salary_range', sa.String(120), nullable=True),
    )
    op.create_index('ix_jobs_company_id', 'jobs', ['company_id'])
    op.create_index('ix_jobs_created_at', 'jobs', ['created_at'])
    op.create_index('ix_jobs_title', 'jobs', ['title'])


def downgrade() -> None:
    op.drop_index('ix_jobs_title', table_name='jobs')
    op.drop_index('ix_jobs_created_at', table_name='jobs')
    op.drop_index('ix_jobs_company_id', table_name='jobs')
    op.drop_table('jobs')
    op.drop_index('ix_companies_slug', table_name='companies')
    op.drop_table('companies')
    op.drop_index('ix_recruiters_email', table_name='recruiters')
    op.drop_table('recruiters')

    sa.Enum(name='experiencelevel').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='workpolicy').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='jobtype').drop(op.get_bind(), checkfirst=True)
