"""Recover the last recorded commit id from an existing changelog."""

import re
from typing import Optional

WATERMARK_LABEL = "Last recorded commit:"

_WATERMARK_PATTERN = re.compile(
    rf"^[ \t]*{re.escape(WATERMARK_LABEL)}[ \t]*(\S+)[ \t]*\r?$", re.MULTILINE
)


def is_watermark_line(line: str) -> bool:
    """Check whether a single line is a watermark marker."""
    return _WATERMARK_PATTERN.match(line) is not None


def format_watermark(commit_id: str) -> str:
    """Render the labeled line recording ``commit_id``."""
    return f"{WATERMARK_LABEL} {commit_id}"


def extract_watermark(text: Optional[str]) -> Optional[str]:
    """Return the most recently recorded commit id, or None.

    Sections are prepended, so the first marker in the document belongs to
    the newest section.
    """
    if not text:
        return None
    match = _WATERMARK_PATTERN.search(text)
    return match.group(1) if match else None
