"""Initial schema: users, reports, likes, comments, cached content

Revision ID: 3f9c2a7d1b04
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f9c2a7d1b04'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(100), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('state', sa.String(50), nullable=False),
        sa.Column('city', sa.String(50), nullable=False),
        sa.Column('profile_picture', sa.String(255)),
        sa.Column('bio', sa.Text()),
        sa.Column('role', sa.Enum('CITIZEN', 'ADMIN', name='userrole'), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_users_email', 'users', ['email'])
    op.create_index('ix_users_state', 'users', ['state'])
    op.create_index('ix_users_city', 'users', ['city'])
    op.create_index('idx_user_city_state', 'users', ['city', 'state'])

    op.create_table(
        'reports',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category', sa.Enum(
            'PLASTIC', 'ELECTRONIC', 'INDUSTRIAL', 'ORGANIC', 'HAZARDOUS', 'MEDICAL', 'OTHER',
            name='reportcategory'
        ), nullable=False),
        sa.Column('severity', sa.Enum('LOW', 'MEDIUM', 'HIGH', 'CRITICAL', name='reportseverity'), nullable=False),
        sa.Column('image_url', sa.String(255)),
        sa.Column('state', sa.String(50), nullable=False),
        sa.Column('city', sa.String(50), nullable=False),
        sa.Column('latitude', sa.Numeric(10, 8)),
        sa.Column('longitude', sa.Numeric(11, 8)),
        sa.Column('status', sa.Enum('OPEN', 'IN_PROGRESS', 'RESOLVED', 'REJECTED', name='reportstatus'), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_reports_user_id', 'reports', ['user_id'])
    op.create_index('ix_reports_city', 'reports', ['city'])
    op.create_index('ix_reports_severity', 'reports', ['severity'])
    op.create_index('ix_reports_created_at', 'reports', ['created_at'])
    op.create_index('idx_report_city_date', 'reports', ['city', 'created_at'])

    op.create_table(
        'report_likes',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('report_id', sa.Integer(), sa.ForeignKey('reports.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.UniqueConstraint('report_id', 'user_id', name='uq_report_like'),
    )
    op.create_index('ix_report_likes_report_id', 'report_likes', ['report_id'])
    op.create_index('ix_report_likes_user_id', 'report_likes', ['user_id'])

    op.create_table(
        'report_comments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('report_id', sa.Integer(), sa.ForeignKey('reports.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_report_comments_report_id', 'report_comments', ['report_id'])

    op.create_table(
        'cached_content',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('city', sa.String(50), nullable=False),
        sa.Column('kind', sa.Enum('NEWS', 'POLLUTION', name='contentkind'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_cached_content_city', 'cached_content', ['city'])
    op.create_index('ix_cached_content_created_at', 'cached_content', ['created_at'])
    op.create_index('idx_cached_content_lookup', 'cached_content', ['city', 'kind', 'created_at'])


def downgrade():
    op.drop_table('cached_content')
    op.drop_table('report_comments')
    op.drop_table('report_likes')
    op.drop_table('reports')
    op.drop_table('users')
    # PostgreSQL keeps enum types after DROP TABLE
    for enum_name in ('contentkind', 'reportstatus', 'reportseverity', 'reportcategory', 'userrole'):
        op.execute(f'DROP TYPE IF EXISTS {enum_name}')
