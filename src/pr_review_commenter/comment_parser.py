# src/pr_review_commenter/comment_parser.py
import re
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .diff_parser import compute_diff_lines
from .exceptions import CommentValidationError
from .models import ReviewComment

logger = logging.getLogger(__name__)

LINE_NOT_IN_DIFF = "line not part of diff"


@dataclass(frozen=True)
class CommentPattern:
    """
    A line-level pattern recognising "Line <N>: <text>" style review output.

    The regex must expose the line number as group 1 and the comment text as
    group 2. A line containing any of the skip markers is dropped even when the
    regex matches.
    """
    name: str
    regex: "re.Pattern[str]"
    skip_markers: Tuple[str, ...] = ()

    def match(self, line: str) -> Optional["re.Match[str]"]:
        return self.regex.search(line)


# Tried in order; the first pattern that matches a line wins.
DEFAULT_COMMENT_PATTERNS: Tuple[CommentPattern, ...] = (
    # "Line 10: text" (OpenAI style), on lines that carry no "* Line N:" bullet anywhere
    CommentPattern(name="plain", regex=re.compile(r"^(?!.*\* Line \d+: ).*?Line (\d+): (.+)")),
    # "* Line 10: text" (Gemini style). The summary bullet repeats the
    # individual findings, so it is skipped.
    CommentPattern(
        name="bullet",
        regex=re.compile(r"\* Line (\d+): (.+)"),
        skip_markers=("Suggested Improvements:",),
    ),
)


def extract_comments(
    model_output: str,
    filename: str,
    patterns: Sequence[CommentPattern] = DEFAULT_COMMENT_PATTERNS,
) -> List[ReviewComment]:
    """Parses free-text model output into review comments for `filename`, in order of appearance."""
    comments: List[ReviewComment] = []
    if not model_output:
        return comments

    for line in model_output.split("\n"):
        for pattern in patterns:
            match = pattern.match(line)
            if not match:
                continue
            if any(marker in line for marker in pattern.skip_markers):
                logger.debug(f"Skipping '{pattern.name}' match containing a skip marker: {line.strip()}")
            else:
                comments.append(
                    ReviewComment(path=filename, line=int(match.group(1)), body=match.group(2).strip())
                )
            break

    return comments


def is_line_in_diff(line: int, patch: Optional[str]) -> bool:
    return line in compute_diff_lines(patch)


def validate_comment(comment: ReviewComment, patch: Optional[str]) -> ReviewComment:
    """
    Checks that a comment targets a line that is part of the file's diff.

    The SCM only accepts inline comments on lines inside the diff, so anything
    else is rejected here instead of failing later with an opaque API error.

    Raises:
        CommentValidationError: If `comment.line` is not a diff line of `patch`.
    """
    if not is_line_in_diff(comment.line, patch):
        raise CommentValidationError(comment, LINE_NOT_IN_DIFF)
    return comment
