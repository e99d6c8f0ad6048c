"""Configuration loading for changelog-gen (changelog-config.json)."""

import copy
import json
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ValidationError

from changelog_gen.errors import ConfigParseError
from changelog_gen.logging import get_logger
from changelog_gen.models.config import ChangelogConfig

CONFIG_FILENAME = "changelog-config.json"

logger = get_logger("config")

DEFAULT_CONFIG: Dict[str, Any] = {
    "changelog": {
        "filename": "CHANGELOG.md",
        "outputPath": "./",
        "encoding": "utf-8",
        "createIfNotExists": True,
    },
    "format": {
        "dateFormat": "YYYY-MM-DD",
        "timezone": None,
        "headerTemplate": "## [{version}] - {date}",
        "commitTemplate": "- {message} ({hash})",
        "sectionSeparator": "\n\n",
        "commitSeparator": "\n",
        "otherSectionTitle": "Other Changes",
    },
    "git": {
        "includeHash": True,
        "hashLength": 7,
        "includeMergeCommits": False,
        "commitMessageFilters": {
            "exclude": ["^Merge", "^Update"],
            "include": [],
        },
    },
    "versioning": {
        "autoDetectVersion": True,
        "versionSource": "package.json",
        "fallbackVersion": "1.0.0",
        "versionPrefix": "",
    },
    "output": {
        "backupExisting": False,
    },
    "customSections": {
        "enabled": False,
        "sections": [],
    },
}

# Written by `changelog-gen init`; sections ship disabled.
EXAMPLE_SECTIONS = [
    {"title": "Features", "keywords": ["feat", "feature", "add"]},
    {"title": "Bug Fixes", "keywords": ["fix", "bug", "patch"]},
    {"title": "Documentation", "keywords": ["docs", "doc", "readme"]},
    {"title": "Styles", "keywords": ["style", "format", "ui"]},
    {"title": "Refactoring", "keywords": ["refactor"]},
    {"title": "Performance", "keywords": ["perf", "performance"]},
    {"title": "Tests", "keywords": ["test", "spec"]},
    {"title": "Build", "keywords": ["build", "ci", "deploy"]},
]


class ConfigValidation(BaseModel):
    """Result of checking the config file on disk."""

    valid: bool
    message: str
    path: Path
    config: Optional[Dict[str, Any]] = None


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge ``override`` over ``base`` without mutating either.

    Nested mappings merge key by key; scalars and lists replace outright.
    """
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def find_config_file(start: Path) -> Optional[Path]:
    """Look for changelog-config.json in ``start`` and its parents."""
    start = Path(start).resolve()
    for directory in [start] + list(start.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_config_file(config_path: Path) -> Dict[str, Any]:
    """Read a config file strictly, raising ConfigParseError on bad content."""
    try:
        data = json.loads(Path(config_path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigParseError(f"Failed to parse {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigParseError(f"Expected a JSON object in {config_path}")
    return data


def build_config(user_config: Optional[Dict[str, Any]] = None) -> ChangelogConfig:
    """Build the effective configuration from defaults plus user values."""
    merged = deep_merge(DEFAULT_CONFIG, user_config or {})
    try:
        return ChangelogConfig.model_validate(merged)
    except ValidationError as e:
        raise ConfigParseError(f"Invalid configuration: {e}") from e


def load_config(
    project_root: Path, config_path: Optional[Path] = None
) -> ChangelogConfig:
    """Load the effective configuration for a project.

    A broken config file is not fatal: a warning is logged and the defaults
    are used instead.
    """
    path = Path(config_path) if config_path else find_config_file(project_root)
    if path is None:
        logger.info("No %s found, using default configuration", CONFIG_FILENAME)
        return build_config()

    try:
        config = build_config(read_config_file(path))
    except ConfigParseError as e:
        logger.warning("%s; falling back to default configuration", e)
        return build_config()

    logger.info("Loaded configuration from %s", path)
    return config


def changelog_path(config: ChangelogConfig, project_root: Path) -> Path:
    """Resolve the changelog document path relative to the project root."""
    settings = config.changelog
    return (Path(project_root) / settings.output_path / settings.filename).resolve()


def template_config() -> Dict[str, Any]:
    """Config written by `init`: the defaults plus example sections."""
    return deep_merge(
        DEFAULT_CONFIG, {"customSections": {"sections": EXAMPLE_SECTIONS}}
    )


def init_config(directory: Path, force: bool = False) -> bool:
    """Write a starter config file, returning False if one already exists."""
    config_file = Path(directory) / CONFIG_FILENAME
    if config_file.exists() and not force:
        logger.info("Config file already exists: %s", config_file)
        return False

    config_file.write_text(
        json.dumps(template_config(), indent=2, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )
    logger.info("Created config file: %s", config_file)
    return True


def validate_existing_config(directory: Path) -> ConfigValidation:
    """Check that the config file in ``directory`` exists and is usable."""
    config_file = Path(directory) / CONFIG_FILENAME
    if not config_file.exists():
        return ConfigValidation(
            valid=False, message="Config file does not exist", path=config_file
        )

    try:
        user_config = read_config_file(config_file)
        effective = build_config(user_config)
    except ConfigParseError as e:
        return ConfigValidation(valid=False, message=str(e), path=config_file)

    return ConfigValidation(
        valid=True,
        message="Config file is valid",
        path=config_file,
        config=effective.model_dump(by_alias=True, mode="json"),
    )
