"""Tests for rendering changelog sections."""

from datetime import datetime

from changelog_gen.config import build_config
from changelog_gen.core.renderer import ChangelogRenderer, format_date, substitute
from changelog_gen.models.commit import CommitRecord
from changelog_gen.models.entry import Section, VersionEntry

HEAD = "9" * 40


def make_commit(n: int, subject: str, body: str = "") -> CommitRecord:
    full_id = f"{n}" * 40
    return CommitRecord(full_id=full_id, short_id=full_id[:8], subject=subject, body=body)


def make_entry(*commits: CommitRecord) -> VersionEntry:
    return VersionEntry(
        version="1.0.0", date="2026-10-19", last_recorded_id=HEAD, commits=list(commits)
    )


def test_substitute_leaves_unknown_tokens():
    assert substitute("{a}-{b}-{a}", {"a": "x"}) == "x-{b}-x"


def test_format_date_tokens():
    when = datetime(2026, 3, 7, 9, 5, 2)
    assert format_date(when, "YYYY-MM-DD") == "2026-03-07"
    assert format_date(when, "DD/MM/YYYY HH:mm:ss") == "07/03/2026 09:05:02"


def test_flat_rendering():
    renderer = ChangelogRenderer(build_config())
    text = renderer.render(
        make_entry(make_commit(1, "feat: add login"), make_commit(2, "fix: crash on start"))
    )

    assert text == (
        "## [1.0.0] - 2026-10-19\n"
        f"Last recorded commit: {HEAD}\n\n"
        "- feat: add login (1111111)\n"
        "- fix: crash on start (2222222)\n\n"
    )


def test_version_prefix_and_custom_templates():
    config = build_config(
        {
            "versioning": {"versionPrefix": "v"},
            "format": {
                "headerTemplate": "# {version} ({date}) {unknown}",
                "commitTemplate": "* {subject} [{hash}]",
                "sectionSeparator": "\n",
            },
            "git": {"hashLength": 4},
        }
    )
    text = ChangelogRenderer(config).render(make_entry(make_commit(3, "feat: x", "details")))

    assert text.startswith("# v1.0.0 (2026-10-19) {unknown}\n")
    assert "* feat: x [3333]" in text
    assert text.endswith("\n")


def test_short_id_used_without_hash_length():
    config = build_config({"git": {"hashLength": None}})
    line = ChangelogRenderer(config).render_commit(make_commit(4, "feat: y"))
    assert line == "- feat: y (44444444)"


def test_grouped_rendering():
    config = build_config(
        {
            "customSections": {
                "enabled": True,
                "sections": [
                    {"title": "Features", "keywords": ["feat"]},
                    {"title": "Fixes", "keywords": ["fix"]},
                ],
            }
        }
    )
    text = ChangelogRenderer(config).render(
        make_entry(
            make_commit(1, "fix: one"),
            make_commit(2, "chore: two"),
            make_commit(3, "feat: three"),
        )
    )

    assert text == (
        "## [1.0.0] - 2026-10-19\n"
        f"Last recorded commit: {HEAD}"
        "\n\n### Fixes\n- fix: one (1111111)"
        "\n\n### Features\n- feat: three (3333333)"
        "\n\n### Other Changes\n- chore: two (2222222)"
        "\n\n"
    )


def test_grouped_rendering_omits_empty_other():
    renderer = ChangelogRenderer(build_config())
    text = renderer.render(
        make_entry(make_commit(1, "feat: one")),
        grouped=True,
        sections=[Section(title="Features", keywords=["feat"])],
    )
    assert "### Features" in text
    assert "Other Changes" not in text


def test_empty_entry_still_ends_with_separator():
    text = ChangelogRenderer(build_config()).render(make_entry())
    assert text == f"## [1.0.0] - 2026-10-19\nLast recorded commit: {HEAD}\n\n"
