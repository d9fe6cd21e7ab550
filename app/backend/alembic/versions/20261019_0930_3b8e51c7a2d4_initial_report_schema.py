"""INITIAL_REPORT_SCHEMA

Revision ID: 3b8e51c7a2d4
Revises: 
Create Date: 2026-10-19 09:30:12.418305

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = '3b8e51c7a2d4'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('project_types',
    sa.Column('id', sa.Uuid(), nullable=False),
    sa.Column('name', sa.String(length=255), nullable=False),
    sa.Column('description', sa.Text(), nullable=True),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_project_types_id'), 'project_types', ['id'], unique=False)
    op.create_index(op.f('ix_project_types_name'), 'project_types', ['name'], unique=True)
    op.create_table('projects',
    sa.Column('id', sa.Uuid(), nullable=False),
    sa.Column('name', sa.String(length=255), nullable=False),
    sa.Column('description', sa.Text(), nullable=True),
    sa.Column('project_type_id', sa.Uuid(), nullable=True),
    sa.Column('assigned_agent_id', sa.String(length=255), nullable=True),
    sa.Column('customer_id', sa.String(length=255), nullable=True),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.ForeignKeyConstraint(['project_type_id'], ['project_types.id'], ondelete='SET NULL'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_projects_assigned_agent_id'), 'projects', ['assigned_agent_id'], unique=False)
    op.create_index(op.f('ix_projects_customer_id'), 'projects', ['customer_id'], unique=False)
    op.create_index(op.f('ix_projects_id'), 'projects', ['id'], unique=False)
    op.create_index(op.f('ix_projects_project_type_id'), 'projects', ['project_type_id'], unique=False)
    op.create_table('report_templates',
    sa.Column('id', sa.Uuid(), nullable=False),
    sa.Column('name', sa.String(length=255), nullable=False),
    sa.Column('description', sa.Text(), nullable=True),
    sa.Column('project_type_id', sa.Uuid(), nullable=False),
    sa.Column('number_of_submissions', sa.Integer(), nullable=True),
    sa.Column('sections', sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), 'postgresql'), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.ForeignKeyConstraint(['project_type_id'], ['project_types.id'], ondelete='RESTRICT'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('name', 'project_type_id', name='uq_report_template_name_project_type')
    )
    op.create_index(op.f('ix_report_templates_id'), 'report_templates', ['id'], unique=False)
    op.create_index(op.f('ix_report_templates_project_type_id'), 'report_templates', ['project_type_id'], unique=False)
    op.create_table('report_submissions',
    sa.Column('id', sa.Uuid(), nullable=False),
    sa.Column('project_id', sa.Uuid(), nullable=False),
    sa.Column('report_template_id', sa.Uuid(), nullable=False),
    sa.Column('status', sa.Enum('DRAFT', 'SUBMITTED', 'APPROVED', 'REJECTED', name='submissionstatus', native_enum=False, length=20), nullable=False),
    sa.Column('report_data', sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), 'postgresql'), nullable=False),
    sa.Column('approval_comments', sa.Text(), nullable=True),
    sa.Column('rejection_comments', sa.Text(), nullable=True),
    sa.Column('submitted_at', sa.DateTime(timezone=True), nullable=True),
    sa.Column('approved_at', sa.DateTime(timezone=True), nullable=True),
    sa.Column('rejected_at', sa.DateTime(timezone=True), nullable=True),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='RESTRICT'),
    sa.ForeignKeyConstraint(['report_template_id'], ['report_templates.id'], ondelete='RESTRICT'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_report_submissions_id'), 'report_submissions', ['id'], unique=False)
    op.create_index(op.f('ix_report_submissions_project_id'), 'report_submissions', ['project_id'], unique=False)
    op.create_index('ix_report_submissions_project_template', 'report_submissions', ['project_id', 'report_template_id'], unique=False)
    op.create_index(op.f('ix_report_submissions_report_template_id'), 'report_submissions', ['report_template_id'], unique=False)
    op.create_index(op.f('ix_report_submissions_status'), 'report_submissions', ['status'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_report_submissions_status'), table_name='report_submissions')
    op.drop_index(op.f('ix_report_submissions_report_template_id'), table_name='report_submissions')
    op.drop_index('ix_report_submissions_project_template', table_name='report_submissions')
    op.drop_index(op.f('ix_report_submissions_project_id'), table_name='report_submissions')
    op.drop_index(op.f('ix_report_submissions_id'), table_name='report_submissions')
    op.drop_table('report_submissions')
    op.drop_index(op.f('ix_report_templates_project_type_id'), table_name='report_templates')
    op.drop_index(op.f('ix_report_templates_id'), table_name='report_templates')
    op.drop_table('report_templates')
    op.drop_index(op.f('ix_projects_project_type_id'), table_name='projects')
    op.drop_index(op.f('ix_projects_id'), table_name='projects')
    op.drop_index(op.f('ix_projects_customer_id'), table_name='projects')
    op.drop_index(op.f('ix_projects_assigned_agent_id'), table_name='projects')
    op.drop_table('projects')
    op.drop_index(op.f('ix_project_types_name'), table_name='project_types')
    op.drop_index(op.f('ix_project_types_id'), table_name='project_types')
    op.drop_table('project_types')
