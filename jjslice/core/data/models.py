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

from dataclasses import dataclass
from enum import Enum


class MoveDirection(str, Enum):
    TO_PARENT = "parent"
    TO_CHILD = "child"


@dataclass(frozen=True)
class MoveResult:
    """
    Result of a partial move.

    committed_content is what the ancestor side holds for the path after
    the move.
    """

    direction: MoveDirection
    path: str
    committed_content: str
    source_revision: str
    destination_revision: str
