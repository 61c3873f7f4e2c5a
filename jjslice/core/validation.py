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
Input validation for jjslice commands.

Validation runs before any engine call so bad input never leaves a
half-moved change behind.
"""

import re
import shutil
from collections.abc import Sequence

from .data.selection import SelectionRange
from .engine_commands.jj_commands import JJAdapter
from .exceptions import (
    ValidationError,
    engine_not_found,
    invalid_selection,
    not_jj_repository,
)

_SELECTION_RE = re.compile(r"^\s*(\d+)\s*(?:-\s*(\d+)\s*)?$")


def validate_jj_repository(adapter: JJAdapter, binary: str = "jj") -> None:
    if shutil.which(binary) is None:
        raise engine_not_found(binary)
    if not adapter.is_repository():
        raise not_jj_repository(str(adapter.repo_path))


def parse_line_selection(text: str) -> SelectionRange:
    """
    Parse an editor line selection such as ``7`` or ``3-5``.

    Lines are 1-indexed and ranges are inclusive. The result is 0-indexed.
    """
    match = _SELECTION_RE.match(text)
    if match is None:
        raise invalid_selection(text)

    first = int(match.group(1))
    last = int(match.group(2)) if match.group(2) else first
    if first < 1 or last < first:
        raise invalid_selection(text)

    return SelectionRange.from_editor_lines(first, last)


def parse_line_selections(values: Sequence[str]) -> list[SelectionRange]:
    selections = []
    for value in values:
        # "3-5,9" is accepted as well as repeated options
        for part in value.split(","):
            if part.strip():
                selections.append(parse_line_selection(part))

    # an empty selection is a no-op for the callers, not an error
    return selections


def validate_path(path: str) -> str:
    cleaned = path.replace("\\", "/").strip()
    if not cleaned:
        raise ValidationError("File path cannot be empty")
    if cleaned.startswith("/") or re.match(r"^[A-Za-z]:/", cleaned):
        raise ValidationError(
            f"Path must be relative to the repository root: {path}"
        )
    if ".." in cleaned.split("/"):
        raise ValidationError(f"Path must stay inside the repository: {path}")
    return cleaned
