"""Models for changelog sections."""

from typing import List, Optional

from pydantic import BaseModel

from .commit import CommitRecord


class Section(BaseModel):
    """A named category that claims commits by keyword."""

    title: str
    keywords: List[str] = []

    model_config = {"frozen": True}


class VersionEntry(BaseModel):
    """Everything rendered into the document by one synthesis run."""

    version: str
    date: str
    last_recorded_id: str
    commits: List[CommitRecord] = []

    model_config = {"frozen": True}


class LatestEntry(BaseModel):
    """The newest section read back out of an existing changelog."""

    version: str
    date: str
    header: str
    content: str
    last_recorded_id: Optional[str] = None

    model_config = {"frozen": True}
