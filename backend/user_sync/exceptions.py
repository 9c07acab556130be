"""Errors surfaced to API callers.

Every error raised while handling a request derives from ``ServiceError`` and
is rendered by a single exception handler as::

    {"success": false, "error": <label>, "details": <message>}

``details`` is omitted when there is nothing beyond the label to report.
"""
from typing import Any, Dict, Optional


class ServiceError(Exception):
    """Base class for errors converted into JSON error responses."""
    
    status_code: int = 500
    error: str = "Server error"
    
    def __init__(self, error: Optional[str] = None, details: Optional[str] = None):
        if error is not None:
            self.error = error
        self.details = details
        super().__init__(details or self.error)
    
    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"success": False, "error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(ServiceError):
    """Required input is missing."""
    status_code = 400
    error = "Invalid request"


class AuthError(ServiceError):
    """The x-api-key header is missing or wrong."""
    status_code = 401
    error = "Invalid or missing API key"


class DatastoreError(ServiceError):
    """A select, insert or update against the datastore failed."""
    status_code = 500
    error = "Database error"
    
    UNIQUE_VIOLATION = "23505"
    
    def __init__(
        self,
        error: Optional[str] = None,
        details: Optional[str] = None,
        code: Optional[str] = None,
    ):
        super().__init__(error, details)
        self.code = code
    
    @property
    def is_unique_violation(self) -> bool:
        return self.code == self.UNIQUE_VIOLATION


class UnexpectedError(ServiceError):
    """Anything else raised while handling a request."""
    status_code = 500
    error = "Server error"
