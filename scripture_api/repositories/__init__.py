"""Repository modules for database operations.

All repository classes are re-exported here for convenient imports.
"""
from scripture_api.repositories.chat import ChatRepository
from scripture_api.repositories.cross_reference import CrossReferenceRepository
from scripture_api.repositories.highlights import HighlightsRepository
from scripture_api.repositories.posts import PostInteractionsRepository, PostsRepository
from scripture_api.repositories.presence import PresenceRepository
from scripture_api.repositories.user_notes import UserNotesRepository

__all__ = [
    "ChatRepository",
    "CrossReferenceRepository",
    "HighlightsRepository",
    "PostInteractionsRepository",
    "PostsRepository",
    "PresenceRepository",
    "UserNotesRepository",
]
