"""Render a version entry into changelog text."""

from datetime import datetime
from typing import Dict, List, Optional, Sequence
from zoneinfo import ZoneInfo

from changelog_gen.core.categorizer import group_commits
from changelog_gen.core.watermark import format_watermark
from changelog_gen.models.commit import CommitRecord
from changelog_gen.models.config import ChangelogConfig
from changelog_gen.models.entry import Section, VersionEntry

# Case-sensitive: "MM" is the month, "mm" the minute.
_DATE_TOKENS = ("YYYY", "MM", "DD", "HH", "mm", "ss")


def substitute(template: str, values: Dict[str, str]) -> str:
    """Replace ``{name}`` tokens literally; unknown tokens are left alone."""
    result = template
    for name, value in values.items():
        result = result.replace("{" + name + "}", value)
    return result


def format_date(
    when: Optional[datetime] = None,
    pattern: str = "YYYY-MM-DD",
    timezone: Optional[str] = None,
) -> str:
    """Format a timestamp with YYYY/MM/DD/HH/mm/ss tokens."""
    if when is None:
        when = datetime.now(ZoneInfo(timezone)) if timezone else datetime.now()
    elif timezone:
        when = when.astimezone(ZoneInfo(timezone))

    parts = {
        "YYYY": f"{when.year:04d}",
        "MM": f"{when.month:02d}",
        "DD": f"{when.day:02d}",
        "HH": f"{when.hour:02d}",
        "mm": f"{when.minute:02d}",
        "ss": f"{when.second:02d}",
    }
    result = pattern
    for token in _DATE_TOKENS:
        result = result.replace(token, parts[token])
    return result


class ChangelogRenderer:
    """Turns version entries into text using the configured templates."""

    def __init__(self, config: ChangelogConfig):
        self.config = config
        self.format = config.format

    def format_hash(self, commit: CommitRecord) -> str:
        """Full id truncated to the configured length, else the short id."""
        git_settings = self.config.git
        if git_settings.include_hash and git_settings.hash_length:
            return commit.full_id[: git_settings.hash_length]
        return commit.short_id

    def render_header(self, version: str, date: str) -> str:
        prefix = self.config.versioning.version_prefix
        return substitute(
            self.format.header_template,
            {"version": f"{prefix}{version}", "date": date},
        )

    def render_commit(self, commit: CommitRecord) -> str:
        return substitute(
            self.format.commit_template,
            {
                "message": commit.message,
                "subject": commit.subject,
                "hash": self.format_hash(commit),
            },
        )

    def render_lines(self, commits: Sequence[CommitRecord]) -> str:
        return self.format.commit_separator.join(
            self.render_commit(commit) for commit in commits
        )

    def render(
        self,
        entry: VersionEntry,
        grouped: Optional[bool] = None,
        sections: Optional[Sequence[Section]] = None,
    ) -> str:
        """Render a full section, always ending with the section separator.

        ``grouped`` and ``sections`` default to the customSections config.
        """
        if grouped is None:
            grouped = self.config.grouping_enabled
        if sections is None:
            sections = self.config.custom_sections.sections

        separator = self.format.section_separator
        parts: List[str] = [
            self.render_header(entry.version, entry.date),
            "\n",
            format_watermark(entry.last_recorded_id),
        ]

        if grouped:
            groups, uncategorized = group_commits(entry.commits, sections)
            for title, commits in groups.items():
                parts.append(f"{separator}### {title}\n{self.render_lines(commits)}")
            if uncategorized:
                other_title = self.format.other_section_title
                parts.append(
                    f"{separator}### {other_title}\n{self.render_lines(uncategorized)}"
                )
        elif entry.commits:
            parts.append(separator + self.render_lines(entry.commits))

        parts.append(separator)
        return "".join(parts)
