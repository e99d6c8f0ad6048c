"""Result of a synthesis run."""

from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel

from .commit import CommitRecord


class RunState(str, Enum):
    """Step a synthesis run has reached."""

    IDLE = "idle"
    WATERMARK_READ = "watermark_read"
    LOG_FETCHED = "log_fetched"
    FILTERED = "filtered"
    RENDERED = "rendered"
    MERGED = "merged"
    DONE = "done"
    ERROR = "error"


class GenerationResult(BaseModel):
    """Outcome reported back to the caller instead of raising."""

    success: bool
    updated: bool = False
    message: str
    state: RunState = RunState.DONE
    version: Optional[str] = None
    commits_count: int = 0
    changelog_path: Optional[Path] = None
    current_commit_id: Optional[str] = None
    new_commits: List[CommitRecord] = []
    has_new_commits: bool = False
    preview_content: Optional[str] = None
