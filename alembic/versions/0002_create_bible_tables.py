"""Create bible_versions and bible_verses tables

Revision ID: 0002_create_bible_tables
Revises: 0001_create_users
Create Date: 2026-10-19
"""
from alembic import op

revision = '0002_create_bible_tables'
down_revision = '0001_create_users'
branch_labels = None
depends_on = None


def upgrade():
    op.execute(
        """
        CREATE TABLE IF NOT EXISTS bible_versions (
            id SERIAL PRIMARY KEY,
            version_code TEXT NOT NULL UNIQUE,
            version_name TEXT NOT NULL,
            language_code TEXT NOT NULL DEFAULT 'en',
            description TEXT,
            is_active BOOLEAN NOT NULL DEFAULT TRUE,
            created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS bible_verses (
            id SERIAL PRIMARY KEY,
            book TEXT NOT NULL,
            chapter INTEGER NOT NULL CHECK (chapter > 0),
            verse_number INTEGER NOT NULL CHECK (verse_number > 0),
            text TEXT NOT NULL,
            version_id INTEGER NOT NULL REFERENCES bible_versions(id),
            CONSTRAINT uq_bible_verses_natural_key UNIQUE (book, chapter, verse_number, version_id)
        );

        CREATE INDEX IF NOT EXISTS idx_bible_verses_version_book_chapter
            ON bible_verses (version_id, book, chapter);
        """
    )


def downgrade():
    op.execute(
        """
        DROP INDEX IF EXISTS idx_bible_verses_version_book_chapter;
        DROP TABLE IF EXISTS bible_verses;
        DROP TABLE IF EXISTS bible_versions;
        """
    )
