"""Typed view of the effective changelog configuration."""

import codecs
from enum import Enum
from typing import List, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .entry import Section


class RuleKind(str, Enum):
    """How a rule's value is matched against a commit message."""

    SUBSTRING = "substring"
    WORD = "word"
    PREFIX = "prefix"


class _Settings(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class PatternRule(_Settings):
    """An explicit ``{"kind": ..., "value": ...}`` filter entry."""

    kind: RuleKind = RuleKind.SUBSTRING
    value: str


# A filter pattern is either a plain string ("^Merge", "wip", "\\bfix\\b")
# or an explicit kind/value mapping.
PatternSpec = Union[str, PatternRule]


class ChangelogFileSettings(_Settings):
    filename: str = "CHANGELOG.md"
    output_path: str = "./"
    encoding: str = "utf-8"
    create_if_not_exists: bool = True

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as e:
            raise ValueError(f"unknown encoding: {value}") from e
        return value


class FormatSettings(_Settings):
    date_format: str = "YYYY-MM-DD"
    timezone: Optional[str] = None
    header_template: str = "## [{version}] - {date}"
    commit_template: str = "- {message} ({hash})"
    section_separator: str = "\n\n"
    commit_separator: str = "\n"
    other_section_title: str = "Other Changes"

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: Optional[str]) -> Optional[str]:
        if value:
            try:
                ZoneInfo(value)
            except (ZoneInfoNotFoundError, ValueError) as e:
                raise ValueError(f"unknown timezone: {value}") from e
        return value


class CommitMessageFilters(_Settings):
    exclude: List[PatternSpec] = []
    include: List[PatternSpec] = []


class GitSettings(_Settings):
    include_hash: bool = True
    hash_length: Optional[int] = 7
    include_merge_commits: bool = False
    commit_message_filters: CommitMessageFilters = Field(
        default_factory=CommitMessageFilters
    )


class VersioningSettings(_Settings):
    auto_detect_version: bool = True
    version_source: str = "package.json"
    fallback_version: str = "1.0.0"
    version_prefix: str = ""


class OutputSettings(_Settings):
    backup_existing: bool = False


class CustomSections(_Settings):
    enabled: bool = False
    sections: List[Section] = []


class ChangelogConfig(_Settings):
    """Defaults merged with the user's changelog-config.json."""

    changelog: ChangelogFileSettings = Field(default_factory=ChangelogFileSettings)
    format: FormatSettings = Field(default_factory=FormatSettings)
    git: GitSettings = Field(default_factory=GitSettings)
    versioning: VersioningSettings = Field(default_factory=VersioningSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    custom_sections: CustomSections = Field(default_factory=CustomSections)

    @property
    def grouping_enabled(self) -> bool:
        """Whether commits are rendered under category sub-headings."""
        return self.custom_sections.enabled and bool(self.custom_sections.sections)
