"""Reading, merging and writing the changelog document."""

import os
import re
import shutil
import tempfile
from pathlib import Path
from typing import Pattern

from changelog_gen.core.watermark import extract_watermark, is_watermark_line
from changelog_gen.errors import DocumentFormatError
from changelog_gen.logging import get_logger
from changelog_gen.models.entry import LatestEntry

logger = get_logger("document")


def merge(new_section: str, prior: str) -> str:
    """Prepend a freshly rendered section to the existing document."""
    return new_section + prior


def read_document(path: Path, encoding: str = "utf-8") -> str:
    """Return the document text, or an empty string when it doesn't exist.

    Line endings are kept as they are on disk so a rewrite leaves the
    existing bytes untouched.
    """
    path = Path(path)
    if not path.exists():
        return ""
    try:
        with path.open(encoding=encoding, newline="") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise DocumentFormatError(f"{path} is not valid {encoding}: {e}") from e


def write_document(
    path: Path, text: str, encoding: str = "utf-8", backup: bool = False
) -> None:
    """Replace the document atomically via a temp file in the same directory."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if backup and path.exists():
        backup_path = path.with_name(path.name + ".bak")
        shutil.copy2(path, backup_path)
        logger.info("Backed up %s to %s", path, backup_path)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent)
    )
    try:
        # newline="" keeps the rendered line endings byte-for-byte
        with os.fdopen(fd, "w", encoding=encoding, newline="") as f:
            f.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def header_pattern(header_template: str) -> Pattern[str]:
    """Compile a line regex matching headers produced by ``header_template``."""
    pattern = re.escape(header_template)
    for name in ("version", "date"):
        token = re.escape("{" + name + "}")
        pattern = pattern.replace(token, f"(?P<{name}>.+?)", 1)
        pattern = pattern.replace(token, ".+?")
    return re.compile(rf"^{pattern}[ \t]*\r?$", re.MULTILINE)


def extract_latest_entry(
    text: str,
    header_template: str = "## [{version}] - {date}",
    version_prefix: str = "",
) -> LatestEntry:
    """Pull the newest section out of a changelog document."""
    pattern = header_pattern(header_template)
    match = pattern.search(text or "")
    if match is None:
        raise DocumentFormatError("No version header found in changelog")

    following = pattern.search(text, match.end())
    end = following.start() if following else len(text)
    section = text[match.end() : end]

    watermark = extract_watermark(section)
    body_lines = [
        line
        for line in section.strip("\r\n").splitlines()
        if not is_watermark_line(line)
    ]
    content = "\n".join(body_lines).strip()

    groups = match.groupdict()
    version = (groups.get("version") or "").strip()
    if version_prefix and version.startswith(version_prefix):
        version = version[len(version_prefix) :]

    return LatestEntry(
        version=version,
        date=(groups.get("date") or "").strip(),
        header=match.group(0).rstrip(),
        content=content,
        last_recorded_id=watermark,
    )


def read_latest_entry(
    path: Path,
    header_template: str = "## [{version}] - {date}",
    version_prefix: str = "",
    encoding: str = "utf-8",
) -> LatestEntry:
    """Read a changelog file and return its newest section."""
    path = Path(path)
    if not path.exists():
        raise DocumentFormatError(f"Changelog not found: {path}")
    return extract_latest_entry(
        read_document(path, encoding), header_template, version_prefix
    )
