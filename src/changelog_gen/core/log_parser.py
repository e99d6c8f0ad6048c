"""Parse raw ``git log`` output into commit records."""

import re
from typing import List

from changelog_gen.models.commit import CommitRecord

# Pretty format the log query must use: full id, short id, subject, body.
LOG_FORMAT = "%H%n%h%n%s%n%b"

FULL_ID_PATTERN = re.compile(r"^[0-9a-f]{40}$")


def is_full_id(line: str) -> bool:
    """Check whether a line is exactly a 40-character commit id."""
    return FULL_ID_PATTERN.match(line) is not None


def parse_log(text: str) -> List[CommitRecord]:
    """Split log text into commit records, preserving their order.

    Each record is three header lines (full id, short id, subject) followed
    by body lines up to the next full-id line. A body line that happens to
    be 40 hex characters is therefore read as the start of a new record.
    """
    if not text or not text.strip():
        return []

    lines = text.split("\n")
    commits: List[CommitRecord] = []
    i = 0

    while i < len(lines):
        # Header lines are consumed unconditionally
        header = []
        for _ in range(3):
            header.append(lines[i].strip() if i < len(lines) else "")
            i += 1
        full_id, short_id, subject = header

        body_lines = []
        while i < len(lines) and not is_full_id(lines[i]):
            line = lines[i].strip()
            i += 1
            if line:
                body_lines.append(line)

        commits.append(
            CommitRecord(
                full_id=full_id,
                short_id=short_id,
                subject=subject,
                body="\n".join(body_lines),
            )
        )

    return commits
