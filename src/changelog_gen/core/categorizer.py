"""Assign commits to configured sections by keyword."""

import re
from typing import Dict, List, Optional, Sequence, Tuple

from changelog_gen.models.commit import CommitRecord
from changelog_gen.models.entry import Section


def keyword_matches(keyword: str, message: str) -> bool:
    """Whole-word, case-insensitive keyword search."""
    pattern = rf"\b{re.escape(keyword)}\b"
    return re.search(pattern, message, re.IGNORECASE) is not None


def categorize(
    commit: CommitRecord, sections: Sequence[Section]
) -> Optional[Section]:
    """Return the first section with a keyword in the commit message."""
    message = commit.message
    for section in sections:
        for keyword in section.keywords:
            if keyword_matches(keyword, message):
                return section
    return None


def group_commits(
    commits: Sequence[CommitRecord], sections: Sequence[Section]
) -> Tuple[Dict[str, List[CommitRecord]], List[CommitRecord]]:
    """Group commits by section title.

    Titles are ordered by the first commit that lands in them; commits
    keep their chronological order within a group.
    """
    groups: Dict[str, List[CommitRecord]] = {}
    uncategorized: List[CommitRecord] = []

    for commit in commits:
        section = categorize(commit, sections)
        if section is None:
            uncategorized.append(commit)
        else:
            groups.setdefault(section.title, []).append(commit)

    return groups, uncategorized
