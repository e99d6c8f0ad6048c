"""Shared fixtures for changelog-gen tests."""

import json
import tempfile
from pathlib import Path

import pytest
from git import Repo


def commit_file(repo: Repo, relative_path: str, content: str, message: str) -> str:
    """Write a file, commit it and return the full commit id."""
    file_path = Path(repo.working_tree_dir) / relative_path
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content)
    repo.index.add([relative_path])
    return repo.index.commit(message).hexsha


@pytest.fixture
def temp_project():
    """Create a temporary git project with a package.json at version 1.0.0."""
    with tempfile.TemporaryDirectory() as temp_dir:
        project_path = Path(temp_dir).resolve()
        repo = Repo.init(project_path)

        # Configure git user for testing
        with repo.config_writer() as config:
            config.set_value("user", "name", "Test User")
            config.set_value("user", "email", "test@example.com")

        (project_path / "package.json").write_text(
            json.dumps({"name": "demo", "version": "1.0.0"})
        )
        repo.index.add(["package.json"])

        yield project_path, repo


@pytest.fixture
def not_a_repo():
    """A plain directory with no git repository."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir).resolve()
