# src/pr_review_commenter/exceptions.py
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ReviewComment


class ReviewerError(Exception):
    """Base class for all errors raised by the reviewer."""


class ConfigurationError(ReviewerError):
    """Required configuration is missing or invalid. Fatal."""


class SCMAPIError(ReviewerError):
    """The hosting platform API returned a non-success response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        self.message = message
        if status_code is not None:
            super().__init__(f"SCM API error (status {status_code}): {message}")
        else:
            super().__init__(f"SCM API error: {message}")


class LLMBackendError(ReviewerError):
    """The text-generation backend failed or returned no content."""


class CommentValidationError(ReviewerError):
    """A review comment targets a line that cannot be commented on."""

    def __init__(self, comment: 'ReviewComment', reason: str):
        self.comment = comment
        self.reason = reason
        super().__init__(f"Invalid line number: {comment.line} in {comment.path}: {reason}")
