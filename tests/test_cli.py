"""Tests for the changelog-gen command line."""

import json

from click.testing import CliRunner

from changelog_gen.cli.main import main
from changelog_gen.config import CONFIG_FILENAME
from tests.conftest import commit_file


def test_generate_and_rerun(temp_project):
    project_path, repo = temp_project
    commit_file(repo, "a.py", "a\n", "feat: add login")
    runner = CliRunner()

    result = runner.invoke(main, ["generate", str(project_path)])
    assert result.exit_code == 0
    changelog = (project_path / "CHANGELOG.md").read_text()
    assert "- feat: add login" in changelog

    result = runner.invoke(main, ["generate", str(project_path)])
    assert result.exit_code == 0
    assert (project_path / "CHANGELOG.md").read_text() == changelog


def test_generate_preview(temp_project):
    project_path, repo = temp_project
    commit_file(repo, "a.py", "a\n", "feat: add login")

    result = CliRunner().invoke(main, ["generate", str(project_path), "--preview"])

    assert result.exit_code == 0
    assert "feat: add login" in result.output
    assert not (project_path / "CHANGELOG.md").exists()


def test_generate_outside_repository(not_a_repo):
    result = CliRunner().invoke(main, ["generate", str(not_a_repo)])
    assert result.exit_code == 1


def test_init_and_config(not_a_repo, monkeypatch):
    monkeypatch.chdir(not_a_repo)
    runner = CliRunner()

    assert runner.invoke(main, ["config", "--check"]).exit_code == 1

    assert runner.invoke(main, ["init"]).exit_code == 0
    assert (not_a_repo / CONFIG_FILENAME).exists()
    assert runner.invoke(main, ["init"]).exit_code == 0
    assert runner.invoke(main, ["init", "--force"]).exit_code == 0

    assert runner.invoke(main, ["config", "--check"]).exit_code == 0
    result = runner.invoke(main, ["config", "--show"])
    assert result.exit_code == 0
    assert "headerTemplate" in result.output


def test_latest_formats(temp_project, monkeypatch):
    project_path, repo = temp_project
    head = commit_file(repo, "a.py", "a\n", "feat: add login")
    monkeypatch.chdir(project_path)
    runner = CliRunner()
    assert runner.invoke(main, ["generate"]).exit_code == 0

    result = runner.invoke(main, ["latest", "--version-only", "--quiet"])
    assert result.exit_code == 0
    assert result.output.strip() == "1.0.0"

    result = runner.invoke(main, ["latest", "--format", "json", "--raw", "--quiet"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["version"] == "1.0.0"
    assert data["lastRecordedId"] == head
    assert data["content"].startswith("- feat: add login")

    output_file = project_path / "latest.md"
    result = runner.invoke(main, ["latest", "--output", str(output_file), "--quiet"])
    assert result.exit_code == 0
    assert output_file.read_text().startswith("## [1.0.0] - ")


def test_latest_without_changelog(not_a_repo, monkeypatch):
    monkeypatch.chdir(not_a_repo)
    result = CliRunner().invoke(main, ["latest"])
    assert result.exit_code == 1


def test_error_text_is_not_read_as_markup(not_a_repo, monkeypatch):
    monkeypatch.chdir(not_a_repo)
    result = CliRunner().invoke(
        main, ["latest", "--changelog-path", "notes[/red].md", "--quiet"]
    )

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "notes[/red].md" in result.output


def test_latest_output_to_bad_path(temp_project, monkeypatch):
    project_path, repo = temp_project
    commit_file(repo, "a.py", "a\n", "feat: add login")
    monkeypatch.chdir(project_path)
    runner = CliRunner()
    assert runner.invoke(main, ["generate"]).exit_code == 0

    target = project_path / "missing" / "latest.md"
    result = runner.invoke(main, ["latest", "--output", str(target), "--quiet"])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert not target.exists()
