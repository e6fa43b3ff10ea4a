# src/pr_review_commenter/utils/file_filter.py
from typing import List, Optional, Tuple, TYPE_CHECKING
from pathspec import PathSpec

if TYPE_CHECKING:
    from ..models import ChangedFile


def _build_spec(patterns: Optional[List[str]]) -> Optional[PathSpec]:
    if not patterns:
        return None
    return PathSpec.from_lines("gitwildmatch", patterns)


def filter_changed_files(
    files: List['ChangedFile'],
    include_patterns: Optional[List[str]] = None,
    exclude_patterns: Optional[List[str]] = None,
) -> Tuple[List['ChangedFile'], List['ChangedFile']]:
    """
    Splits changed files into those to review and those filtered out by
    gitignore-style patterns matched against `ChangedFile.filename`.

    A file is kept when it matches an include pattern (or none are given) and
    matches no exclude pattern. Both lists keep the input order.
    """
    include_spec = _build_spec(include_patterns)
    exclude_spec = _build_spec(exclude_patterns)

    kept: List['ChangedFile'] = []
    excluded: List['ChangedFile'] = []
    for changed_file in files:
        if include_spec and not include_spec.match_file(changed_file.filename):
            excluded.append(changed_file)
        elif exclude_spec and exclude_spec.match_file(changed_file.filename):
            excluded.append(changed_file)
        else:
            kept.append(changed_file)
    return kept, excluded
