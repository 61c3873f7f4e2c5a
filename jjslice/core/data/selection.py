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

from collections.abc import Sequence
from dataclasses import dataclass, field

from ..exceptions import ValidationError
from .hunk import Hunk


@dataclass(frozen=True)
class SelectionRange:
    """
    An inclusive, 0-indexed range of lines in target-content coordinates.

    The coordinate space is the side of the diff that holds the selected
    lines, which is not necessarily the side the result is written to.
    """

    start_line: int
    end_line: int

    def __post_init__(self):
        if self.start_line < 0 or self.end_line < 0:
            raise ValidationError(
                f"Selection lines must be non-negative: {self.start_line}-{self.end_line}"
            )
        if self.end_line < self.start_line:
            raise ValidationError(
                f"Selection ends before it starts: {self.start_line}-{self.end_line}"
            )

    def contains(self, line: int) -> bool:
        return self.start_line <= line <= self.end_line

    def overlaps(self, start: int, end: int) -> bool:
        """Inclusive overlap test against another 0-indexed span."""
        return max(self.start_line, start) <= min(self.end_line, end)

    @classmethod
    def from_editor_lines(cls, first: int, last: int | None = None) -> "SelectionRange":
        """Build a range from 1-indexed editor line numbers."""
        last = first if last is None else last
        return cls(first - 1, last - 1)


@dataclass(frozen=True)
class ReconstructionRequest:
    base_content: str
    hunks: Sequence[Hunk] = field(default_factory=list)
    selections: Sequence[SelectionRange] = field(default_factory=list)
    inverse: bool = False
