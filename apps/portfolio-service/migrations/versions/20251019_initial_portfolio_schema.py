"""Initial portfolio schema: portfolios, categories, projects, sections, section_contents

Revision ID: 20251019_initial_portfolio
Revises:
Create Date: 2025-10-19 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '20251019_initial_portfolio'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade():
    op.create_table(
        'portfolios',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('owner_id', sa.String(255), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_portfolios_owner_id', 'portfolios', ['owner_id'])
    op.create_index('idx_portfolios_owner_title', 'portfolios', ['owner_id', 'title'])

    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('portfolio_id', sa.Integer(), sa.ForeignKey('portfolios.id', ondelete='CASCADE'), nullable=False),
        sa.Column('owner_id', sa.String(255), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_categories_owner_id', 'categories', ['owner_id'])
    op.create_index('idx_categories_portfolio_position', 'categories', ['portfolio_id', 'position'])

    op.create_table(
        'projects',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('images', postgresql.ARRAY(sa.Text()), nullable=True),
        sa.Column('main_image', sa.String(1024), nullable=True),
        sa.Column('skills', postgresql.ARRAY(sa.Text()), nullable=True),
        sa.Column('client', sa.String(255), nullable=True),
        sa.Column('link', sa.String(1024), nullable=True),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('category_id', sa.Integer(), sa.ForeignKey('categories.id', ondelete='CASCADE'), nullable=False),
        sa.Column('owner_id', sa.String(255), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_projects_owner_id', 'projects', ['owner_id'])
    op.create_index('idx_projects_category_position', 'projects', ['category_id', 'position'])
    op.create_index('idx_projects_client', 'projects', ['client'])
    op.create_index('idx_projects_skills_gin', 'projects', ['skills'], postgresql_using='gin')

    op.create_table(
        'sections',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('type', sa.String(50), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('portfolio_id', sa.Integer(), sa.ForeignKey('portfolios.id', ondelete='CASCADE'), nullable=False),
        sa.Column('owner_id', sa.String(255), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_sections_owner_id', 'sections', ['owner_id'])
    op.create_index('idx_sections_portfolio_position', 'sections', ['portfolio_id', 'position'])
    op.create_index('idx_sections_type', 'sections', ['type'])

    op.create_table(
        'section_contents',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('section_id', sa.Integer(), sa.ForeignKey('sections.id', ondelete='CASCADE'), nullable=False),
        sa.Column('type', sa.String(20), nullable=False, server_default='text'),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('metadata', sa.JSON(), nullable=True),
        sa.Column('owner_id', sa.String(255), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_section_contents_owner_id', 'section_contents', ['owner_id'])
    op.create_index('idx_section_contents_section_order', 'section_contents', ['section_id', 'order'])


def downgrade():
    op.drop_table('section_contents')
    op.drop_table('sections')
    op.drop_table('projects')
    op.drop_table('categories')
    op.drop_table('portfolios')
