"""Exceptions raised by changelog-gen."""


class ChangelogError(RuntimeError):
    """Base class for every failure a synthesis run can report."""


class NotARepositoryError(ChangelogError):
    """Raised when the project directory is not inside a git repository."""


class MissingVersionSourceError(ChangelogError):
    """Raised when the version manifest (package.json, pyproject.toml) is absent."""


class MissingVersionFieldError(ChangelogError):
    """Raised when the version manifest exists but carries no version."""


class ConfigParseError(ChangelogError):
    """Raised when the configuration file cannot be parsed."""


class DocumentFormatError(ChangelogError):
    """Raised when an existing changelog has no recognizable version header."""


class LogQueryError(ChangelogError):
    """Raised when the underlying git log invocation fails."""
