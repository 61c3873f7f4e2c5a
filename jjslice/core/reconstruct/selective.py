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

"""
Selective reconstruction of file content from a parsed diff.

Given the base side of a diff, its hunks and a set of selected line ranges
on the target side, rebuild the file so that only the selected changes are
applied (or, with ``inverse``, only the unselected ones). Content outside
the hunks is copied from the base untouched.

Pure additions are selectable line by line. Any run of changes that holds a
deletion (a pure deletion or a replacement) is applied or skipped as one
unit, because its old and new lines share the same position and picking
half of it would produce content that exists on neither side.
"""

import re
from collections.abc import Sequence

from ..data.hunk import Change, ChangeKind
from ..data.selection import ReconstructionRequest, SelectionRange
from ..diff.hunk_parser import parse_hunks

_LINE_SPLIT_RE = re.compile(r"\r?\n")


def reconstruct(request: ReconstructionRequest) -> str:
    base_content = request.base_content
    has_trailing_newline = base_content.endswith("\n")
    base_lines = _split_lines(base_content)

    selector = _Selector(request.selections, request.inverse)
    result: list[str] = []
    cursor = 0  # 0-indexed position in base_lines

    for hunk in request.hunks:
        # untouched region before the hunk
        while cursor < hunk.old_start - 1 and cursor < len(base_lines):
            result.append(base_lines[cursor])
            cursor += 1

        new_line = hunk.new_start  # 1-indexed position on the target side
        changes = hunk.changes
        i = 0

        while i < len(changes):
            change = changes[i]

            if change.is_context:
                if cursor < len(base_lines):
                    result.append(base_lines[cursor])
                    cursor += 1
                new_line += 1
                i += 1
                continue

            j = i
            while j < len(changes) and not changes[j].is_context:
                j += 1
            block = changes[i:j]
            cursor, new_line = _apply_block(
                block, base_lines, cursor, new_line, selector, result
            )
            i = j

    result.extend(base_lines[cursor:])

    text = "\n".join(result)
    if not base_content:
        # a file that does not exist yet ends with a newline once it has lines
        has_trailing_newline = bool(result)
    return text + "\n" if has_trailing_newline else text


def apply_selected_lines(
    base_content: str,
    diff_text: str,
    selections: Sequence[SelectionRange],
    inverse: bool = False,
) -> str:
    """Parse ``diff_text`` and reconstruct ``base_content`` with the selected lines applied."""
    hunks = parse_hunks(diff_text)
    if not hunks:
        return base_content

    return reconstruct(
        ReconstructionRequest(
            base_content=base_content,
            hunks=hunks,
            selections=selections,
            inverse=inverse,
        )
    )


def _apply_block(
    block: list[Change],
    base_lines: list[str],
    cursor: int,
    new_line: int,
    selector: "_Selector",
    result: list[str],
) -> tuple[int, int]:
    additions = [c for c in block if c.kind is ChangeKind.ADDITION]
    deletion_count = sum(1 for c in block if c.kind is ChangeKind.DELETION)

    if deletion_count == 0:
        for addition in additions:
            if selector.wants_line(new_line - 1):
                result.append(addition.text)
            new_line += 1
        return cursor, new_line

    # pure deletions occupy the position of the line that follows them
    span_start = new_line - 1
    span_end = span_start + max(0, len(additions) - 1)

    if selector.wants_span(span_start, span_end):
        cursor += deletion_count
        result.extend(a.text for a in additions)
    else:
        kept = base_lines[cursor : cursor + deletion_count]
        result.extend(kept)
        cursor += len(kept)

    return cursor, new_line + len(additions)


class _Selector:
    def __init__(self, selections: Sequence[SelectionRange], inverse: bool):
        self.selections = tuple(selections)
        self.inverse = inverse

    def wants_line(self, line: int) -> bool:
        selected = any(s.contains(line) for s in self.selections)
        return selected != self.inverse

    def wants_span(self, start: int, end: int) -> bool:
        selected = any(s.overlaps(start, end) for s in self.selections)
        return selected != self.inverse


def _split_lines(content: str) -> list[str]:
    if not content:
        return []
    if content.endswith("\n"):
        content = content[:-1]
        if content.endswith("\r"):
            content = content[:-1]
    return _LINE_SPLIT_RE.split(content)
