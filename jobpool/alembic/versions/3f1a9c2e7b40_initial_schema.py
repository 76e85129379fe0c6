"""initial_schema

Revision ID: 3f1a9c2e7b40
Revises:
Create Date: 2026-10-19 10:12:41.337204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1a9c2e7b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all application tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('email', sa.String(255), unique=True, nullable=False),
        sa.Column('role', sa.String(20), nullable=False, server_default='professional'),
        sa.Column('created_at', sa.DateTime, nullable=False),
    )

    op.create_table(
        'countries',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(120), unique=True, nullable=False),
    )

    op.create_table(
        'provinces',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('country_id', sa.String(36), sa.ForeignKey('countries.id'), nullable=False),
        sa.Column('name', sa.String(120), nullable=False),
    )

    op.create_table(
        'cities',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('country_id', sa.String(36), sa.ForeignKey('countries.id'), nullable=False),
        sa.Column('province_id', sa.String(36), sa.ForeignKey('provinces.id'), nullable=True),
        sa.Column('name', sa.String(120), nullable=False),
    )

    op.create_table(
        'professions',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(120), nullable=False),
        sa.Column('category', sa.String(120), nullable=False, server_default=''),
    )

    op.create_table(
        'companies',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id'), unique=True, nullable=False),
        sa.Column('company_name', sa.String(255), nullable=False),
        sa.Column('logo', sa.Text, nullable=True),
        sa.Column('description', sa.Text, nullable=False, server_default=''),
        sa.Column('total_jobs_posted', sa.Integer, nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime, nullable=False),
    )

    op.create_table(
        'professionals',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id'), unique=True, nullable=False),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('profession_id', sa.String(36), sa.ForeignKey('professions.id'), nullable=True),
        sa.Column('cv', sa.Text, nullable=True),
        sa.Column('cv_file_name', sa.String(255), nullable=True),
    )

    op.create_table(
        'trainees',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id'), unique=True, nullable=False),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('cv', sa.Text, nullable=True),
    )

    op.create_table(
        'jobs',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('company_id', sa.String(36), sa.ForeignKey('companies.id'), nullable=False, index=True),
        sa.Column('profession_id', sa.String(36), sa.ForeignKey('professions.id'), nullable=False, index=True),
        sa.Column('profession_name', sa.String(120), nullable=False),
        sa.Column('city_id', sa.String(36), sa.ForeignKey('cities.id'), nullable=True, index=True),
        sa.Column('country_id', sa.String(36), sa.ForeignKey('countries.id'), nullable=True, index=True),
        sa.Column('province_id', sa.String(36), sa.ForeignKey('provinces.id'), nullable=True),
        sa.Column('title', sa.String(255), nullable=False, server_default=''),
        sa.Column('description', sa.Text, nullable=False, server_default=''),
        sa.Column('requirements', sa.Text, nullable=False, server_default=''),
        sa.Column('salary', sa.String(100), nullable=True),
        sa.Column('job_type', sa.String(20), nullable=False, server_default='full-time'),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('posted_date', sa.DateTime, nullable=False, index=True),
        sa.Column('views', sa.Integer, nullable=False, server_default='0'),
        sa.Column('applications_count', sa.Integer, nullable=False, server_default='0'),
    )

    op.create_table(
        'applications',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('job_id', sa.String(36), sa.ForeignKey('jobs.id'), nullable=False, index=True),
        sa.Column('professional_id', sa.String(36), sa.ForeignKey('professionals.id'), nullable=True),
        sa.Column('trainee_id', sa.String(36), sa.ForeignKey('trainees.id'), nullable=True),
        sa.Column('notes', sa.Text, nullable=False, server_default=''),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('applied_at', sa.DateTime, nullable=False),
        sa.UniqueConstraint('job_id', 'professional_id', name='uq_application_job_professional'),
        sa.UniqueConstraint('job_id', 'trainee_id', name='uq_application_job_trainee'),
    )


def downgrade() -> None:
    """Drop all application tables."""
    op.drop_table('applications')
    op.drop_table('jobs')
    op.drop_table('trainees')
    op.drop_table('professionals')
    op.drop_table('companies')
    op.drop_table('professions')
    op.drop_table('cities')
    op.drop_table('provinces')
    op.drop_table('countries')
    op.drop_table('users')
