"""Data models for changelog-gen."""

from .commit import CommitRecord
from .config import ChangelogConfig
from .entry import LatestEntry, Section, VersionEntry
from .result import GenerationResult, RunState

__all__ = [
    "ChangelogConfig",
    "CommitRecord",
    "GenerationResult",
    "LatestEntry",
    "RunState",
    "Section",
    "VersionEntry",
]
