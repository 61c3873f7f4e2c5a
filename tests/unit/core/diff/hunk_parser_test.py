# -----------------------------------------------------------------------------
# jjslice - Dual Licensed Software
# Copyright (c) 2025 Adem Can
#
# This file is part of jjslice.
#
# jjslice is available under a dual-license:
#   1. AGPLv3 (Affero General Public License v3)
#      - See LICENSE.txt and LICENSE-AGPL.txt
#      - Online: https://www.gnu.org/licenses/agpl-3.0.html
#
#   2. Commercial License
#      - For proprietary or revenue-generating use,
#        including SaaS, embedding in closed-source software,
#        or avoiding AGPL obligations.
#      - See LICENSE.txt and COMMERCIAL-LICENSE.txt
#      - Contact: ademfcan@gmail.com
#
# By using this file, you agree to the terms of one of the two licenses above.
# -----------------------------------------------------------------------------

import pytest

from jjslice.core.data.hunk import ChangeKind
from jjslice.core.diff.hunk_parser import parse_hunks
from jjslice.core.exceptions import DiffParseError

# -----------------------------------------------------------------------------
# Tests
# -----------------------------------------------------------------------------


def test_parse_full_git_diff():
    diff = (
        "diff --git a/src/app.py b/src/app.py\n"
        "index 3b18e51..a4c2f0e 100644\n"
        "--- a/src/app.py\n"
        "+++ b/src/app.py\n"
        "@@ -1,3 +1,3 @@\n"
        " one\n"
        "-two\n"
        "+TWO\n"
        " three\n"
    )

    hunks = parse_hunks(diff)

    assert len(hunks) == 1
    hunk = hunks[0]
    assert (hunk.old_start, hunk.old_lines, hunk.new_start, hunk.new_lines) == (
        1,
        3,
        1,
        3,
    )
    assert [c.kind for c in hunk.changes] == [
        ChangeKind.CONTEXT,
        ChangeKind.DELETION,
        ChangeKind.ADDITION,
        ChangeKind.CONTEXT,
    ]
    assert [c.text for c in hunk.changes] == ["one", "two", "TWO", "three"]


def test_parse_bare_hunks():
    diff = "@@ -1 +1,2 @@\n a\n+b\n@@ -10,2 +11,0 @@\n-x\n-y\n"

    hunks = parse_hunks(diff)

    assert len(hunks) == 2
    assert (hunks[0].old_lines, hunks[0].new_lines) == (1, 2)
    assert (hunks[1].old_start, hunks[1].new_start, hunks[1].new_lines) == (
        10,
        11,
        0,
    )
    assert len(hunks[1].deletions) == 2


def test_parse_new_file_diff():
    diff = (
        "diff --git a/new.txt b/new.txt\n"
        "new file mode 100644\n"
        "index 0000000..e69de29\n"
        "--- /dev/null\n"
        "+++ b/new.txt\n"
        "@@ -0,0 +1,2 @@\n"
        "+first\n"
        "+second\n"
    )

    hunks = parse_hunks(diff)

    assert hunks[0].old_start == 0
    assert [c.text for c in hunks[0].additions] == ["first", "second"]


def test_no_newline_marker_is_ignored():
    diff = "@@ -1 +1 @@\n-old\n\\ No newline at end of file\n+new\n\\ No newline at end of file\n"

    hunks = parse_hunks(diff)

    assert [c.prefix + c.text for c in hunks[0].changes] == ["-old", "+new"]


def test_empty_line_is_empty_context():
    diff = "@@ -1,3 +1,3 @@\n a\n\n-b\n+c\n"

    changes = parse_hunks(diff)[0].changes

    assert changes[1].is_context
    assert changes[1].text == ""


def test_form_feed_stays_inside_line():
    diff = "@@ -1,2 +1,2 @@\n x\n-y\n+y\x0cz\n"

    changes = parse_hunks(diff)[0].changes

    assert [c.prefix + c.text for c in changes] == [" x", "-y", "+y\x0cz"]


def test_crlf_diff_lines():
    diff = "@@ -1 +1 @@\r\n-a\r\n+b\r\n"

    changes = parse_hunks(diff)[0].changes

    assert [c.prefix + c.text for c in changes] == ["-a", "+b"]


def test_only_first_file_is_parsed():
    diff = (
        "diff --git a/a.txt b/a.txt\n"
        "@@ -1 +1 @@\n"
        "-a\n"
        "+A\n"
        "diff --git a/b.txt b/b.txt\n"
        "@@ -1 +1 @@\n"
        "-b\n"
        "+B\n"
    )

    hunks = parse_hunks(diff)

    assert len(hunks) == 1
    assert hunks[0].additions[0].text == "A"


@pytest.mark.parametrize("diff", ["", None])
def test_empty_diff_has_no_hunks(diff):
    assert parse_hunks(diff) == []


def test_binary_diff_has_no_hunks():
    diff = (
        "diff --git a/img.png b/img.png\n"
        "index 1111111..2222222 100644\n"
        "Binary files a/img.png and b/img.png differ\n"
    )

    assert parse_hunks(diff) == []


def test_malformed_hunk_header_raises():
    with pytest.raises(DiffParseError) as exc_info:
        parse_hunks("@@ -a,b +c,d @@\n+x\n")

    assert "Malformed hunk header" in exc_info.value.message


def test_garbage_header_raises():
    with pytest.raises(DiffParseError):
        parse_hunks("this is not a diff\n")


def test_unknown_line_after_hunk_raises():
    with pytest.raises(DiffParseError):
        parse_hunks("@@ -1 +1 @@\n-a\n+b\n*oops\n")


def test_hunk_header_round_trips():
    hunk = parse_hunks("@@ -3,2 +3,4 @@ def main():\n x\n+y\n+z\n x\n")[0]

    assert hunk.header() == "@@ -3,2 +3,4 @@"
