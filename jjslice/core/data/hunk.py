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

from dataclasses import dataclass, field
from enum import Enum


class ChangeKind(str, Enum):
    CONTEXT = "context"
    ADDITION = "addition"
    DELETION = "deletion"


@dataclass(frozen=True)
class Change:
    """A single line of a hunk body, stored without its prefix or newline."""

    kind: ChangeKind
    text: str

    @property
    def is_context(self) -> bool:
        return self.kind is ChangeKind.CONTEXT

    @property
    def prefix(self) -> str:
        if self.kind is ChangeKind.ADDITION:
            return "+"
        if self.kind is ChangeKind.DELETION:
            return "-"
        return " "


@dataclass(frozen=True)
class Hunk:
    # 1-indexed line positions in the base/target content
    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    changes: list[Change] = field(default_factory=list)

    @property
    def additions(self) -> list[Change]:
        return [c for c in self.changes if c.kind is ChangeKind.ADDITION]

    @property
    def deletions(self) -> list[Change]:
        return [c for c in self.changes if c.kind is ChangeKind.DELETION]

    def header(self) -> str:
        return (
            f"@@ -{self.old_start},{self.old_lines} "
            f"+{self.new_start},{self.new_lines} @@"
        )
