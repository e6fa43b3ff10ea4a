# src/pr_review_commenter/diff_parser.py
import re
import logging
from typing import List, Optional

logger = logging.getLogger(__name__)

# Start line of the new-file side of a hunk header, e.g. "+12,7" in "@@ -10,6 +12,7 @@"
HUNK_NEW_START_RE = re.compile(r"\+(\d+)(,\d+)?")


def compute_diff_lines(patch: Optional[str]) -> List[int]:
    """
    Returns the new-file line numbers that are part of a file's patch.

    The patch is the per-file unified diff fragment returned by the SCM API
    (hunks only, no file headers). Every line other than a removal ("-") or
    the "\\ No newline at end of file" marker is an addition or context line
    and occupies one line of the new file.

    Args:
        patch: The raw patch text for one file.

    Returns:
        Line numbers in discovery order. Malformed input yields a partial or
        empty list; this function never raises.
    """
    if not patch:
        return []

    diff_lines: List[int] = []
    current_line = 0
    for line in patch.split("\n"):
        if line.startswith("@@"):
            match = HUNK_NEW_START_RE.search(line)
            if match:
                current_line = int(match.group(1))
            else:
                # Keep counting from where we were
                logger.debug(f"Unrecognised hunk header, line counter left at {current_line}: {line!r}")
        elif line.startswith("-") or line.startswith("\\"):
            continue
        else:
            diff_lines.append(current_line)
            current_line += 1

    return diff_lines
