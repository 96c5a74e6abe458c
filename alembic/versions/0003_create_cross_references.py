"""Create cross_references table

Revision ID: 0003_create_cross_references
Revises: 0002_create_bible_tables
Create Date: 2026-10-19
"""
from alembic import op

revision = '0003_create_cross_references'
down_revision = '0002_create_bible_tables'
branch_labels = None
depends_on = None


def upgrade():
    op.execute(
        """
        CREATE TABLE IF NOT EXISTS cross_references (
            id SERIAL PRIMARY KEY,
            from_book TEXT NOT NULL,
            from_chapter INTEGER NOT NULL,
            from_verse INTEGER NOT NULL,
            to_book TEXT NOT NULL,
            to_chapter INTEGER NOT NULL,
            to_verse INTEGER NOT NULL,
            relation_text TEXT,
            CONSTRAINT uq_cross_references_edge
                UNIQUE (from_book, from_chapter, from_verse, to_book, to_chapter, to_verse)
        );

        CREATE INDEX IF NOT EXISTS idx_cross_references_target
            ON cross_references (to_book, to_chapter, to_verse);
        """
    )


def downgrade():
    op.execute(
        """
        DROP INDEX IF EXISTS idx_cross_references_target;
        DROP TABLE IF EXISTS cross_references;
        """
    )
