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
from dataclasses import dataclass

WORKING_COPY = "@"

_SIMPLE_REVSET_RE = re.compile(r"^(@|[A-Za-z0-9_.]+)-*$")


@dataclass(frozen=True)
class RevisionHandle:
    """
    Explicit handle on the revision a move is anchored to.

    Revisions are jj revset expressions. The parent and grandparent are
    derived with the ``-`` operator so every step of a move names the
    revision it touches instead of relying on whatever ``@`` currently is.
    """

    revset: str = WORKING_COPY

    @property
    def parent(self) -> "RevisionHandle":
        return RevisionHandle(_wrap(self.revset) + "-")

    @property
    def grandparent(self) -> "RevisionHandle":
        return self.parent.parent

    def __str__(self) -> str:
        return self.revset


def _wrap(revset: str) -> str:
    # plain symbols and parent chains like @-- can take another "-" directly
    if _SIMPLE_REVSET_RE.match(revset):
        return revset
    return f"({revset})"
