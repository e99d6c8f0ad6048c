"""Commit model for parsed git history."""

from pydantic import BaseModel


class CommitRecord(BaseModel):
    """A single commit as reported by ``git log``."""

    full_id: str
    short_id: str
    subject: str
    body: str = ""

    model_config = {"frozen": True}

    @property
    def message(self) -> str:
        """Subject, followed by the body on its own lines when there is one."""
        if self.body:
            return f"{self.subject}\n{self.body}"
        return self.subject
