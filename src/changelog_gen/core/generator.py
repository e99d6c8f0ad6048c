"""Incremental changelog generation."""

from datetime import datetime
from pathlib import Path
from typing import List, NamedTuple, Optional

from changelog_gen.config import changelog_path, load_config
from changelog_gen.core.document import (
    merge,
    read_document,
    read_latest_entry,
    write_document,
)
from changelog_gen.core.filters import FilterRuleSet, filter_commits
from changelog_gen.core.git_log import GitLogSource
from changelog_gen.core.log_parser import parse_log
from changelog_gen.core.renderer import ChangelogRenderer, format_date
from changelog_gen.core.version import resolve_version
from changelog_gen.core.watermark import extract_watermark
from changelog_gen.errors import ChangelogError
from changelog_gen.logging import get_logger
from changelog_gen.models.commit import CommitRecord
from changelog_gen.models.config import ChangelogConfig
from changelog_gen.models.entry import LatestEntry, VersionEntry
from changelog_gen.models.result import GenerationResult, RunState

logger = get_logger("generator")

NO_NEW_COMMITS = "No new commits since the last changelog entry"
NO_QUALIFYING_COMMITS = "No new commits qualify for the changelog"


class _Collected(NamedTuple):
    version: str
    head_id: str
    path: Path
    prior: str
    new_commits: List[CommitRecord]
    included: List[CommitRecord]


class ChangelogGenerator:
    """Runs one synthesis: watermark, log query, filter, render, merge.

    Each call to :meth:`generate` or :meth:`preview` is a separate run;
    nothing but the files on disk carries over between runs.
    """

    def __init__(
        self,
        project_root: Path,
        config: Optional[ChangelogConfig] = None,
        config_path: Optional[Path] = None,
        log_source: Optional[GitLogSource] = None,
        now: Optional[datetime] = None,
    ):
        self.project_root = Path(project_root).resolve()
        self._config = config
        self._config_path = config_path
        self.log_source = log_source or GitLogSource(self.project_root)
        self.now = now
        self.state = RunState.IDLE

    @property
    def config(self) -> ChangelogConfig:
        """Effective configuration, loaded once on first use."""
        if self._config is None:
            self._config = load_config(self.project_root, self._config_path)
        return self._config

    @property
    def changelog_path(self) -> Path:
        return changelog_path(self.config, self.project_root)

    def generate(
        self, force: bool = False, project_path: Optional[str] = None
    ) -> GenerationResult:
        """Prepend a new section for commits since the last run.

        Without ``force`` nothing is written when there are no new or no
        qualifying commits.
        """
        self.state = RunState.IDLE
        try:
            collected = self._collect(project_path)

            if not collected.new_commits and not force:
                logger.info(NO_NEW_COMMITS)
                return self._not_updated(NO_NEW_COMMITS, collected)
            if not collected.included and not force:
                logger.info(NO_QUALIFYING_COMMITS)
                return self._not_updated(NO_QUALIFYING_COMMITS, collected)

            settings = self.config
            if not settings.changelog.create_if_not_exists and not collected.path.exists():
                raise ChangelogError(
                    f"{collected.path} does not exist and createIfNotExists is off"
                )

            section = self._render(collected)
            merged = merge(section, collected.prior)
            self.state = RunState.MERGED

            write_document(
                collected.path,
                merged,
                encoding=settings.changelog.encoding,
                backup=settings.output.backup_existing,
            )
            self.state = RunState.DONE
        except (ChangelogError, OSError, UnicodeError) as e:
            return self._failed(e)

        logger.info("Changelog updated: %s", collected.path)
        logger.info(
            "Version %s | %d new commits | latest commit %s",
            collected.version,
            len(collected.included),
            collected.head_id,
        )
        return GenerationResult(
            success=True,
            updated=True,
            message="Changelog updated",
            state=self.state,
            version=collected.version,
            commits_count=len(collected.included),
            changelog_path=collected.path,
            current_commit_id=collected.head_id,
            new_commits=collected.included,
            has_new_commits=bool(collected.included),
            preview_content=section,
        )

    def preview(self, project_path: Optional[str] = None) -> GenerationResult:
        """Render the section ``generate`` would write, without writing it."""
        self.state = RunState.IDLE
        try:
            collected = self._collect(project_path)
            if not collected.new_commits:
                return self._not_updated(NO_NEW_COMMITS, collected)
            if not collected.included:
                return self._not_updated(NO_QUALIFYING_COMMITS, collected)
            section = self._render(collected)
            self.state = RunState.DONE
        except (ChangelogError, OSError, UnicodeError) as e:
            return self._failed(e)

        return GenerationResult(
            success=True,
            updated=False,
            message="Preview generated",
            state=self.state,
            version=collected.version,
            commits_count=len(collected.included),
            changelog_path=collected.path,
            current_commit_id=collected.head_id,
            new_commits=collected.included,
            has_new_commits=True,
            preview_content=section,
        )

    def latest(self, path: Optional[Path] = None) -> LatestEntry:
        """Newest section of the changelog; raises DocumentFormatError."""
        settings = self.config
        return read_latest_entry(
            Path(path) if path else self.changelog_path,
            header_template=settings.format.header_template,
            version_prefix=settings.versioning.version_prefix,
            encoding=settings.changelog.encoding,
        )

    def _collect(self, project_path: Optional[str]) -> _Collected:
        settings = self.config
        logger.info("Project root: %s", self.project_root)
        if project_path:
            logger.info("Restricting commits to %s", project_path)

        head_id = self.log_source.head_commit_id()
        version = resolve_version(self.project_root, settings)

        path = self.changelog_path
        prior = read_document(path, settings.changelog.encoding)
        since = extract_watermark(prior)
        if since is None:
            logger.info("No previous entry found, including full history")
        self.state = RunState.WATERMARK_READ

        new_commits = parse_log(self.log_source.commits_since(since, project_path))
        self.state = RunState.LOG_FETCHED

        rules = FilterRuleSet.from_settings(settings.git)
        included = filter_commits(new_commits, rules)
        self.state = RunState.FILTERED
        logger.debug(
            "%d new commits, %d after filtering", len(new_commits), len(included)
        )

        return _Collected(version, head_id, path, prior, new_commits, included)

    def _render(self, collected: _Collected) -> str:
        settings = self.config
        entry = VersionEntry(
            version=collected.version,
            date=format_date(
                self.now, settings.format.date_format, settings.format.timezone
            ),
            last_recorded_id=collected.head_id,
            commits=collected.included,
        )
        section = ChangelogRenderer(settings).render(entry)
        self.state = RunState.RENDERED
        return section

    def _not_updated(self, message: str, collected: _Collected) -> GenerationResult:
        self.state = RunState.DONE
        return GenerationResult(
            success=True,
            updated=False,
            message=message,
            state=self.state,
            version=collected.version,
            commits_count=0,
            changelog_path=collected.path,
            current_commit_id=collected.head_id,
        )

    def _failed(self, error: Exception) -> GenerationResult:
        self.state = RunState.ERROR
        logger.debug("Run failed: %s", error)
        return GenerationResult(
            success=False, updated=False, message=str(error), state=self.state
        )
