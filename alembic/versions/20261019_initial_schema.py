"""Initial schema for the catalog tables

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000

Creates the seven catalog tables. Each carries an integer row_id recording
insertion order next to its string key column.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create catalog, favorites, presence and audit tables."""
    op.create_table(
        'documents',
        sa.Column('row_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('document_id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=500), nullable=False),
        sa.Column('url', sa.String(length=2048), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category', sa.String(length=200), nullable=False),
        sa.Column('file_type', sa.String(length=50), nullable=False),
        sa.Column('owner_email', sa.String(length=320), nullable=False),
        sa.Column('tags', sa.Text(), nullable=False),
        sa.Column('date_added', sa.DateTime(), nullable=False),
        sa.Column('last_modified', sa.DateTime(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.PrimaryKeyConstraint('row_id'),
        sa.UniqueConstraint('document_id'),
        sa.UniqueConstraint('url'),
    )
    op.create_index(op.f('ix_documents_category'), 'documents', ['category'], unique=False)
    op.create_index(op.f('ix_documents_status'), 'documents', ['status'], unique=False)

    op.create_table(
        'categories',
        sa.Column('row_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('category_id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('created_by', sa.String(length=320), nullable=False),
        sa.Column('date_created', sa.DateTime(), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False),
        sa.Column('document_count', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('row_id'),
        sa.UniqueConstraint('category_id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'tags',
        sa.Column('row_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('tag_id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('created_by', sa.String(length=320), nullable=False),
        sa.Column('date_created', sa.DateTime(), nullable=False),
        sa.Column('usage_count', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('row_id'),
        sa.UniqueConstraint('tag_id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'user_favorites',
        sa.Column('row_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('favorite_id', sa.String(length=64), nullable=False),
        sa.Column('user_email', sa.String(length=320), nullable=False),
        sa.Column('document_id', sa.String(length=64), nullable=False),
        sa.Column('date_added', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('row_id'),
        sa.UniqueConstraint('favorite_id'),
        sa.UniqueConstraint('user_email', 'document_id', name='uq_favorite_user_document'),
    )
    op.create_index(op.f('ix_user_favorites_user_email'), 'user_favorites', ['user_email'], unique=False)
    op.create_index(op.f('ix_user_favorites_document_id'), 'user_favorites', ['document_id'], unique=False)

    op.create_table(
        'online_users',
        sa.Column('row_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('session_id', sa.String(length=64), nullable=False),
        sa.Column('user_email', sa.String(length=320), nullable=False),
        sa.Column('user_name', sa.String(length=200), nullable=False),
        sa.Column('login_time', sa.DateTime(), nullable=False),
        sa.Column('last_activity', sa.DateTime(), nullable=False),
        sa.Column('avatar', sa.String(length=16), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.PrimaryKeyConstraint('row_id'),
        sa.UniqueConstraint('session_id'),
        sa.UniqueConstraint('user_email'),
    )
    op.create_index(op.f('ix_online_users_last_activity'), 'online_users', ['last_activity'], unique=False)

    op.create_table(
        'activity_log',
        sa.Column('row_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('activity_id', sa.String(length=64), nullable=False),
        sa.Column('user_email', sa.String(length=320), nullable=False),
        sa.Column('user_name', sa.String(length=200), nullable=False),
        sa.Column('action', sa.String(length=100), nullable=False),
        sa.Column('document_id', sa.String(length=64), nullable=True),
        sa.Column('details', sa.Text(), nullable=False),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('row_id'),
        sa.UniqueConstraint('activity_id'),
    )

    op.create_table(
        'analytics',
        sa.Column('row_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('view_id', sa.String(length=64), nullable=False),
        sa.Column('document_id', sa.String(length=64), nullable=False),
        sa.Column('user_email', sa.String(length=320), nullable=False),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        sa.Column('source', sa.String(length=100), nullable=False),
        sa.Column('document_name', sa.String(length=500), nullable=False),
        sa.PrimaryKeyConstraint('row_id'),
        sa.UniqueConstraint('view_id'),
    )
    op.create_index(op.f('ix_analytics_document_id'), 'analytics', ['document_id'], unique=False)


def downgrade() -> None:
    """Drop all catalog tables."""
    op.drop_index(op.f('ix_analytics_document_id'), table_name='analytics')
    op.drop_table('analytics')
    op.drop_table('activity_log')
    op.drop_index(op.f('ix_online_users_last_activity'), table_name='online_users')
    op.drop_table('online_users')
    op.drop_index(op.f('ix_user_favorites_document_id'), table_name='user_favorites')
    op.drop_index(op.f('ix_user_favorites_user_email'), table_name='user_favorites')
    op.drop_table('user_favorites')
    op.drop_table('tags')
    op.drop_table('categories')
    op.drop_index(op.f('ix_documents_status'), table_name='documents')
    op.drop_index(op.f('ix_documents_category'), table_name='documents')
    op.drop_table('documents')
