"""initial_leads_schema

Revision ID: 3f1c2a9b7d10
Revises:
Create Date: 2025-08-02

Creates the tables for the landing page and the back office:
- settings: key/value settings (support WhatsApp number)
- betting_sites: referral sites offered on the intake form
- user_submissions: captured leads
- admin_users: admin directory
- auth_identities, refresh_token, login_audit: identity provider
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9b7d10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('settings',
        sa.Column('key', sa.String(length=100), nullable=False),
        sa.Column('value', sa.Text(), nullable=False, server_default=''),
        sa.PrimaryKeyConstraint('key')
    )

    op.create_table('betting_sites',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('display_name', sa.String(length=255), nullable=False),
        sa.Column('url', sa.String(length=500), nullable=False),
        sa.Column('logo_url', sa.String(length=500), nullable=True),
        sa.Column('button_color', sa.String(length=20), nullable=False, server_default='green'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_betting_sites_created_at', 'betting_sites', ['created_at'], unique=False)

    op.create_table('user_submissions',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('mobile_number', sa.String(length=10), nullable=False),
        sa.Column('selected_website', sa.String(length=255), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=True, server_default='pending'),
        sa.Column('submitted_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_user_submissions_submitted_at', 'user_submissions', ['submitted_at'], unique=False)

    op.create_table('auth_identities',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('email_redirect_to', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_auth_identities_email', 'auth_identities', ['email'], unique=True)

    op.create_table('admin_users',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('role', sa.String(length=9), nullable=False, server_default='admin'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_admin_users_user_id', 'admin_users', ['user_id'], unique=False)

    op.create_table('refresh_token',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('token', sa.Text(), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('revoked', sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['auth_identities.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_refresh_token_id', 'refresh_token', ['id'], unique=False)
    op.create_index('ix_refresh_token_token', 'refresh_token', ['token'], unique=True)
    op.create_index('ix_refresh_token_user_id', 'refresh_token', ['user_id'], unique=False)

    op.create_table('login_audit',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('success', sa.Boolean(), nullable=False),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        sa.CheckConstraint("email <> ''", name='ck_login_audit_email_nonempty'),
        sa.PrimaryKeyConstraint('id')
    )


def downgrade() -> None:
    op.drop_table('login_audit')
    op.drop_index('ix_refresh_token_user_id', table_name='refresh_token')
    op.drop_index('ix_refresh_token_token', table_name='refresh_token')
    op.drop_index('ix_refresh_token_id', table_name='refresh_token')
    op.drop_table('refresh_token')
    op.drop_index('ix_admin_users_user_id', table_name='admin_users')
    op.drop_table('admin_users')
    op.drop_index('ix_auth_identities_email', table_name='auth_identities')
    op.drop_table('auth_identities')
    op.drop_index('ix_user_submissions_submitted_at', table_name='user_submissions')
    op.drop_table('user_submissions')
    op.drop_index('ix_betting_sites_created_at', table_name='betting_sites')
    op.drop_table('betting_sites')
    op.drop_table('settings')
