"""Pydantic models for request/response schemas."""
from datetime import datetime
from pydantic import BaseModel, Field, EmailStr, computed_field, field_validator
from typing import Optional, List


class HealthCheck(BaseModel):
    """Health check response model."""
    status: str
    timestamp: datetime
    version: str = "1.0.0"


class MessageResponse(BaseModel):
    """Plain acknowledgement payload."""
    message: str


# Authentication Schemas
class UserCreate(BaseModel):
    """Request model for user registration."""
    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=6, max_length=100, description="Password")
    phone: Optional[str] = Field(default=None, max_length=30, description="Optional phone number")


class UserLogin(BaseModel):
    """Request model for user login."""
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., description="Password")


class GoogleLoginRequest(BaseModel):
    """Google Identity Services credential (an ID token)."""
    credential: str = Field(..., min_length=1)


class User(BaseModel):
    """Response model for user data."""
    id: int
    name: Optional[str] = None
    email: str
    phone: Optional[str] = None
    role: str = "user"
    profile_picture: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None

    @computed_field
    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class AuthResponse(BaseModel):
    """User plus the bearer token for clients that do not use cookies."""
    user: User
    token: str


class ProfileUpdate(BaseModel):
    """Request model for profile edits."""
    name: str = Field(..., description="Display name")
    phone: Optional[str] = Field(default=None, max_length=30)
    profile_picture: Optional[str] = Field(default=None, max_length=500, description="Profile image URL")


class ProfileUpdateResponse(BaseModel):
    user: User
    message: str = "Profile updated successfully"


class PasswordChange(BaseModel):
    old_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=100)


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ForgotPasswordResponse(BaseModel):
    message: str
    reset_token: Optional[str] = None


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=100)


# Bible content
class BibleVersion(BaseModel):
    """A translation that has verses loaded."""
    id: int
    version_code: str
    version_name: str
    language_code: str
    description: Optional[str] = None
    is_active: bool = True
    verse_count: int = 0


class Verse(BaseModel):
    """A single verse row joined with its version metadata."""
    id: int
    book: str
    chapter: int
    verse_number: int
    text: str
    version_id: Optional[int] = None
    version_code: Optional[str] = None
    version_name: Optional[str] = None
    language_code: Optional[str] = None


class BookEntry(BaseModel):
    book: str


class ChapterEntry(BaseModel):
    chapter: int


class ParallelVerseText(BaseModel):
    text: str
    version_name: str
    language_code: str


# Cross references
class CrossReferenceEntry(BaseModel):
    """Single cross reference target with the default-version verse text."""
    book: str
    chapter: int
    verse: int
    reference: str
    text: str = ""
    relation_text: Optional[str] = None
    version_id: Optional[int] = None


class CrossReferenceResponse(BaseModel):
    """Response for cross reference lookups."""
    success: bool = True
    cross_references: List[CrossReferenceEntry]


class CrossReferenceTotals(BaseModel):
    total_references: int
    unique_source_verses: int
    unique_target_verses: int


class CrossReferenceBookCount(BaseModel):
    from_book: str
    reference_count: int


class CrossReferenceStatsResponse(BaseModel):
    success: bool = True
    statistics: CrossReferenceTotals
    top_books: List[CrossReferenceBookCount]


# Highlights
class HighlightCreate(BaseModel):
    verse_id: int
    color_hex: str = Field(default="#ffff00", max_length=20)
    highlighted_text: Optional[str] = None
    start_offset: Optional[int] = Field(default=0, ge=0)
    end_offset: Optional[int] = Field(default=0, ge=0)
    note: Optional[str] = None


class HighlightUpdate(BaseModel):
    color_hex: Optional[str] = Field(default=None, max_length=20)
    highlighted_text: Optional[str] = None
    note: Optional[str] = None

    @field_validator("color_hex")
    @classmethod
    def color_not_null(cls, value: Optional[str]) -> str:
        # Omit the field to keep the current color; a highlight always has one.
        if value is None:
            raise ValueError("color_hex cannot be null")
        return value


class Highlight(BaseModel):
    id: int
    user_id: int
    verse_id: int
    color_hex: str
    highlighted_text: Optional[str] = None
    start_offset: int = 0
    end_offset: int = 0
    note: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    book: Optional[str] = None
    chapter: Optional[int] = None
    verse_number: Optional[int] = None
    text: Optional[str] = None
    version_id: Optional[int] = None
    version_name: Optional[str] = None
    version_code: Optional[str] = None


class HighlightCreated(BaseModel):
    id: int
    note: Optional[str] = None
    message: str = "Highlight created successfully"


# Notes
class NoteWrite(BaseModel):
    """Create/update payload; title and content are both required."""
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    verse_reference: Optional[str] = Field(default=None, max_length=100)
    tags: List[str] = Field(default_factory=list)


class Note(BaseModel):
    id: int
    title: str
    content: str
    verse_reference: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# Community posts
class PostWrite(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)


class Post(BaseModel):
    id: int
    title: str
    content: str
    author_id: Optional[int] = None
    author_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PostStats(BaseModel):
    likes: int
    comments: int


class LikeToggleResponse(BaseModel):
    liked: bool
    message: str


class LikeStatus(BaseModel):
    liked: bool


class CommentCreate(BaseModel):
    comment: str


class Comment(BaseModel):
    id: int
    comment: str
    created_at: Optional[datetime] = None
    author_name: Optional[str] = None


# Presence, admin and chat
class PresenceUpdate(BaseModel):
    offline: bool = False


class SuccessResponse(BaseModel):
    success: bool = True


class OnlineCount(BaseModel):
    count: int


class AdminUser(BaseModel):
    id: int
    name: Optional[str] = None
    email: str
    role: str
    created_at: Optional[datetime] = None
    last_seen: Optional[datetime] = None
    is_online: bool = False


class AdminUserUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    role: str = Field(default="user", pattern="^(user|admin)$")


class ChatMessageCreate(BaseModel):
    message: str = Field(..., min_length=1, max_length=5000)


class AdminChatMessageCreate(BaseModel):
    message: str = Field(..., min_length=1, max_length=5000)
    user_id: Optional[int] = None


class ChatMessage(BaseModel):
    id: int
    message: str
    sender: str
    sender_name: Optional[str] = None
    user_id: Optional[int] = None
    timestamp: Optional[datetime] = None


# Word meaning
class WordMeaningRequest(BaseModel):
    word: str = Field(..., max_length=100)
    context: str = Field(default="biblical", max_length=50)


class WebSearchResult(BaseModel):
    title: Optional[str] = None
    snippet: Optional[str] = None
    link: Optional[str] = None
    source: Optional[str] = None


class WordMeaningResponse(BaseModel):
    word: str
    meaning: str
    context: str
    source: str
    results_count: int = 0
    web_search_results: Optional[List[WebSearchResult]] = None
    total_web_results: int = 0
    telugu_translation: str
    detailed_explanation: str
    example_sentences: List[str]
    verb_forms: str
    biblical_context: str
    search_query: Optional[str] = None
    error: Optional[str] = None


class WordMeaningStatus(BaseModel):
    message: str
    google_search_available: bool
    timestamp: datetime
