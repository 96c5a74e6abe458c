"""Custom exceptions for the Scripture Reader API."""
from fastapi import HTTPException


class DatabaseError(HTTPException):
    """Database-related errors."""
    def __init__(self, detail: str = "Database operation failed"):
        super().__init__(status_code=500, detail=detail)


class ExternalServiceError(HTTPException):
    """Errors from third-party services (Google sign-in, web search)."""
    def __init__(self, detail: str = "External service unavailable"):
        super().__init__(status_code=503, detail=detail)


class ValidationError(HTTPException):
    """Input validation errors."""
    def __init__(self, detail: str = "Invalid input"):
        super().__init__(status_code=400, detail=detail)
