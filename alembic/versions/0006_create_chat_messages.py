"""Create chat_messages table

Revision ID: 0006_create_chat_messages
Revises: 0005_create_community_tables
Create Date: 2026-10-19
"""
from alembic import op

revision = '0006_create_chat_messages'
down_revision = '0005_create_community_tables'
branch_labels = None
depends_on = None


def upgrade():
    op.execute(
        """
        CREATE TABLE IF NOT EXISTS chat_messages (
            id SERIAL PRIMARY KEY,
            message TEXT NOT NULL,
            sender TEXT NOT NULL CHECK (sender IN ('user', 'admin')),
            sender_name TEXT,
            -- NULL on an admin message means a broadcast to every user
            user_id INTEGER REFERENCES users(id) ON DELETE CASCADE,
            timestamp TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
        );

        CREATE INDEX IF NOT EXISTS idx_chat_messages_user_timestamp
            ON chat_messages (user_id, timestamp);
        """
    )


def downgrade():
    op.execute(
        """
        DROP INDEX IF EXISTS idx_chat_messages_user_timestamp;
        DROP TABLE IF EXISTS chat_messages;
        """
    )
