# src/pr_review_commenter/models.py
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class ReviewComment:
    """
    A single inline review comment extracted from model output.
    """
    path: str
    line: int  # Line number in the new version of the file
    body: str


@dataclass
class ChangedFile:
    """
    A file changed by the pull request, as listed by the SCM API.
    """
    filename: str
    patch: Optional[str] = None  # None for binary files or diffs too large for the API
    status: str = "modified"

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "ChangedFile":
        return cls(
            filename=data["filename"],
            patch=data.get("patch"),
            status=data.get("status", "modified"),
        )


@dataclass
class PullRequestDetails:
    number: int
    head_sha: str
    title: str = ""


@dataclass
class ReviewSummary:
    """Counters for a single review run."""
    files_reviewed: int = 0
    files_skipped: int = 0
    comments_posted: int = 0
    comments_rejected: int = 0
    comments_failed: int = 0
    skipped_paths: List[str] = field(default_factory=list)
