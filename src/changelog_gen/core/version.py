"""Project version discovery from package manifests."""

import json
import tomllib
from pathlib import Path

from changelog_gen.errors import MissingVersionFieldError, MissingVersionSourceError
from changelog_gen.logging import get_logger
from changelog_gen.models.config import ChangelogConfig

logger = get_logger("version")


def _version_from_package_json(manifest: Path) -> str:
    try:
        data = json.loads(manifest.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise MissingVersionFieldError(f"Cannot read version from {manifest}: {e}") from e
    version = data.get("version") if isinstance(data, dict) else None
    if not version:
        raise MissingVersionFieldError(f"{manifest.name} has no version field")
    return str(version)


def _version_from_pyproject(manifest: Path) -> str:
    try:
        data = tomllib.loads(manifest.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise MissingVersionFieldError(f"Cannot read version from {manifest}: {e}") from e

    version = data.get("project", {}).get("version") or (
        data.get("tool", {}).get("poetry", {}).get("version")
    )
    if not version:
        raise MissingVersionFieldError(f"{manifest.name} has no version field")
    return str(version)


_READERS = {
    "package.json": _version_from_package_json,
    "pyproject.toml": _version_from_pyproject,
}


def read_project_version(project_root: Path, source: str = "package.json") -> str:
    """Read the version string from a manifest in the project root."""
    manifest = Path(project_root) / source
    if not manifest.exists():
        raise MissingVersionSourceError(f"{manifest} does not exist")

    reader = _READERS.get(manifest.name)
    if reader is None:
        raise MissingVersionSourceError(f"Unsupported version source: {source}")
    return reader(manifest)


def resolve_version(project_root: Path, config: ChangelogConfig) -> str:
    """Version for the new entry: the manifest's, or the configured fallback."""
    versioning = config.versioning
    if not versioning.auto_detect_version:
        logger.debug("Version auto-detection disabled, using %s", versioning.fallback_version)
        return versioning.fallback_version
    return read_project_version(project_root, versioning.version_source)
