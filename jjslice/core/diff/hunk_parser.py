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

import re

from loguru import logger

from ..data.hunk import Change, ChangeKind, Hunk
from ..exceptions import DiffParseError

_HUNK_HEADER_RE = re.compile(
    r"^@@ -(?P<old_start>\d+)(?:,(?P<old_lines>\d+))?"
    r" \+(?P<new_start>\d+)(?:,(?P<new_lines>\d+))? @@"
)

# only newlines end a diff line, form feeds and the like are content
_LINE_SPLIT_RE = re.compile(r"\r?\n")

_PREFIX_KINDS = {
    " ": ChangeKind.CONTEXT,
    "+": ChangeKind.ADDITION,
    "-": ChangeKind.DELETION,
}

# metadata lines that may show up between "diff --git" and the first hunk
_FILE_HEADER_PREFIXES = (
    "index ",
    "new file mode ",
    "deleted file mode ",
    "old mode ",
    "new mode ",
    "similarity index ",
    "rename from ",
    "rename to ",
    "copy from ",
    "copy to ",
    "--- ",
    "+++ ",
)


def parse_hunks(diff_text: str | None) -> list[Hunk]:
    """
    Parse the hunks of the first file in a unified diff.

    The ``diff --git`` preamble and the ``---``/``+++`` file headers are
    optional, so bare ``@@`` hunks parse as well. Binary sections produce no
    hunks. Anything that cannot be read as a hunk raises DiffParseError.
    """
    if not diff_text:
        return []

    lines = _LINE_SPLIT_RE.split(diff_text)
    if lines[-1] == "":
        lines.pop()
    hunks: list[Hunk] = []
    seen_file = False
    i = 0

    while i < len(lines):
        line = lines[i]

        if line.startswith("diff --git "):
            if seen_file:
                # only the first file section is relevant for a single path
                break
            seen_file = True
            i += 1
            continue

        if line.startswith("Binary files ") or line.startswith("GIT binary patch"):
            logger.debug("Binary diff section, no hunks to parse")
            return []

        if line.startswith("@@"):
            hunk, i = _parse_hunk(lines, i)
            hunks.append(hunk)
            continue

        if hunks:
            raise DiffParseError(
                f"Unexpected line after hunk: {line!r}",
                "Hunk bodies may only hold ' ', '+' and '-' prefixed lines",
            )

        if line.startswith(_FILE_HEADER_PREFIXES) or not line.strip():
            i += 1
            continue

        raise DiffParseError(
            f"Unexpected line in diff header: {line!r}",
            "Expected a unified diff (diff --git, ---/+++ headers, @@ hunks)",
        )

    logger.debug("Parsed {count} hunks", count=len(hunks))
    return hunks


def _parse_hunk(lines: list[str], start_index: int) -> tuple[Hunk, int]:
    header = lines[start_index]
    old_start, old_lines, new_start, new_lines = _parse_hunk_header(header)

    changes: list[Change] = []
    i = start_index + 1

    while i < len(lines):
        line = lines[i]

        if line.startswith("@@") or line.startswith("diff --git "):
            break

        if line.startswith("\\"):
            # "\ No newline at end of file" qualifies the previous line only
            i += 1
            continue

        if not line:
            # some tools strip the single space of an empty context line
            changes.append(Change(ChangeKind.CONTEXT, ""))
            i += 1
            continue

        kind = _PREFIX_KINDS.get(line[0])
        if kind is None:
            # a trailing non-hunk line ends the hunk; the caller decides
            break

        changes.append(Change(kind, line[1:]))
        i += 1

    return Hunk(old_start, old_lines, new_start, new_lines, changes), i


def _parse_hunk_header(header: str) -> tuple[int, int, int, int]:
    """
    Extract old/new start and length from a @@ -a,b +c,d @@ header.
    Omitted lengths default to 1.
    """
    match = _HUNK_HEADER_RE.match(header)
    if not match:
        raise DiffParseError(f"Malformed hunk header: {header!r}")

    old_lines = match.group("old_lines")
    new_lines = match.group("new_lines")
    return (
        int(match.group("old_start")),
        int(old_lines) if old_lines is not None else 1,
        int(match.group("new_start")),
        int(new_lines) if new_lines is not None else 1,
    )
