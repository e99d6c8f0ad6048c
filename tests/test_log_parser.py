"""Tests for parsing git log output."""

from changelog_gen.core.log_parser import is_full_id, parse_log

ID_A = "a" * 39 + "1"
ID_B = "b" * 39 + "2"
ID_C = "c" * 39 + "3"


def build_log(records):
    """Join records the way `git log --pretty=format:%H%n%h%n%s%n%b` does."""
    chunks = []
    for full_id, short_id, subject, body in records:
        chunks.append(f"{full_id}\n{short_id}\n{subject}\n{body}")
    return "\n".join(chunks)


def test_empty_input():
    assert parse_log("") == []
    assert parse_log("\n  \n") == []


def test_three_records_with_bodies():
    """Bodies are split at the next 40-hex id line."""
    records = [
        (ID_A, "aaaaaa1", "feat: x", "line1\nline2"),
        (ID_B, "bbbbbb2", "fix: y", "line3\nline4"),
        (ID_C, "cccccc3", "docs: z", "line5\nline6"),
    ]
    commits = parse_log(build_log(records))

    assert len(commits) == 3
    assert [(c.full_id, c.short_id, c.subject, c.body) for c in commits] == records


def test_subject_without_body():
    commits = parse_log(f"{ID_A}\naaaaaa1\nfeat: only subject\n")

    assert len(commits) == 1
    assert commits[0].body == ""
    assert commits[0].message == "feat: only subject"


def test_blank_body_lines_dropped():
    text = f"{ID_A}\naaaaaa1\nfeat: x\n\n  first  \n\n\nsecond\n\n{ID_B}\nbbbbbb2\nfix: y\n"
    commits = parse_log(text)

    assert [c.body for c in commits] == ["first\nsecond", ""]
    assert commits[0].message == "feat: x\nfirst\nsecond"


def test_order_preserved():
    commits = parse_log(
        build_log(
            [
                (ID_C, "c3", "third", ""),
                (ID_A, "a1", "first", ""),
            ]
        )
    )
    assert [c.subject for c in commits] == ["third", "first"]


def test_hex_body_line_is_read_as_boundary():
    """Known limitation: a body line shaped like an id starts a new record."""
    text = f"{ID_A}\naaaaaa1\nfeat: x\n{ID_B}\n"
    commits = parse_log(text)

    assert len(commits) == 2
    assert commits[1].full_id == ID_B
    assert commits[1].short_id == ""


def test_is_full_id():
    assert is_full_id(ID_A)
    assert not is_full_id(ID_A[:-1])
    assert not is_full_id(ID_A.upper())
    assert not is_full_id(" " + ID_A)
