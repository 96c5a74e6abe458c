"""Create highlights and user_notes tables

Revision ID: 0004_create_highlights_and_notes
Revises: 0003_create_cross_references
Create Date: 2026-10-19
"""
from alembic import op

revision = '0004_create_highlights_and_notes'
down_revision = '0003_create_cross_references'
branch_labels = None
depends_on = None


def upgrade():
    op.execute(
        """
        CREATE TABLE IF NOT EXISTS highlights (
            id SERIAL PRIMARY KEY,
            user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            verse_id INTEGER NOT NULL REFERENCES bible_verses(id) ON DELETE CASCADE,
            color_hex TEXT NOT NULL DEFAULT '#ffff00',
            highlighted_text TEXT,
            start_offset INTEGER NOT NULL DEFAULT 0,
            end_offset INTEGER NOT NULL DEFAULT 0,
            note TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
        );

        CREATE INDEX IF NOT EXISTS idx_highlights_user_created_at
            ON highlights (user_id, created_at DESC);

        CREATE TABLE IF NOT EXISTS user_notes (
            id SERIAL PRIMARY KEY,
            user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            title TEXT NOT NULL,
            content TEXT NOT NULL,
            verse_reference TEXT,
            tags JSONB NOT NULL DEFAULT '[]'::jsonb,
            created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
        );

        CREATE INDEX IF NOT EXISTS idx_user_notes_user_updated_at
            ON user_notes (user_id, updated_at DESC);
        """
    )


def downgrade():
    op.execute(
        """
        DROP INDEX IF EXISTS idx_user_notes_user_updated_at;
        DROP TABLE IF EXISTS user_notes;
        DROP INDEX IF EXISTS idx_highlights_user_created_at;
        DROP TABLE IF EXISTS highlights;
        """
    )
