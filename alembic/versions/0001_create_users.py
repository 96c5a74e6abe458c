"""Create users table

Revision ID: 0001_create_users
Revises:
Create Date: 2026-10-19
"""
from alembic import op

revision = '0001_create_users'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.execute(
        """
        CREATE TABLE IF NOT EXISTS users (
            id SERIAL PRIMARY KEY,
            name TEXT,
            email TEXT NOT NULL,
            hashed_password TEXT,
            phone TEXT,
            role TEXT NOT NULL DEFAULT 'user' CHECK (role IN ('user', 'admin')),
            google_id TEXT UNIQUE,
            profile_picture TEXT,
            is_active BOOLEAN NOT NULL DEFAULT TRUE,
            is_online BOOLEAN NOT NULL DEFAULT FALSE,
            last_seen TIMESTAMPTZ,
            created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
        );

        -- Emails are compared case-insensitively at login
        CREATE UNIQUE INDEX IF NOT EXISTS idx_users_email_lower ON users (LOWER(email));
        CREATE INDEX IF NOT EXISTS idx_users_online_last_seen ON users (is_online, last_seen);
        """
    )


def downgrade():
    op.execute(
        """
        DROP INDEX IF EXISTS idx_users_online_last_seen;
        DROP INDEX IF EXISTS idx_users_email_lower;
        DROP TABLE IF EXISTS users;
        """
    )
