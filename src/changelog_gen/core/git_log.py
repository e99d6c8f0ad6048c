"""Git log queries backed by GitPython."""

from pathlib import Path
from typing import Optional

import git
from git import Repo

from changelog_gen.core.log_parser import LOG_FORMAT
from changelog_gen.errors import LogQueryError, NotARepositoryError
from changelog_gen.logging import get_logger

logger = get_logger("git_log")


class GitLogSource:
    """Produces raw commit log text for a project repository."""

    def __init__(self, project_root: Path):
        self.project_root = Path(project_root).resolve()
        self._repo: Optional[Repo] = None

    @property
    def repo(self) -> Repo:
        """Get the git repository, opening it on first use."""
        if self._repo is None:
            try:
                self._repo = Repo(self.project_root, search_parent_directories=True)
            except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
                raise NotARepositoryError(
                    f"Not a git repository: {self.project_root}"
                ) from e
        return self._repo

    def head_commit_id(self) -> str:
        """Full id of the commit HEAD points at."""
        try:
            return self.repo.git.rev_parse("HEAD")
        except git.exc.GitCommandError as e:
            raise LogQueryError(f"Git command failed: git rev-parse HEAD\n{e}") from e

    def commits_since(
        self, since: Optional[str] = None, subpath: Optional[str] = None
    ) -> str:
        """Raw log text for commits after ``since``, oldest first.

        With no ``since`` the full history reachable from HEAD is returned.
        ``subpath`` (relative to the project root) restricts the log to
        commits touching that path.
        """
        revision_range = f"{since}..HEAD" if since else "HEAD"
        args = [revision_range, f"--pretty=format:{LOG_FORMAT}", "--reverse"]
        if subpath:
            args += ["--", str(self.project_root / subpath)]

        logger.debug("git log %s", " ".join(args))
        try:
            return self.repo.git.log(*args)
        except git.exc.GitCommandError as e:
            raise LogQueryError(
                f"Git command failed: git log {' '.join(args)}\n{e}"
            ) from e
