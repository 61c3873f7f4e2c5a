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

import contextlib
import os
from collections.abc import Iterator
from dataclasses import dataclass
from time import time_ns

from loguru import logger

from ..exceptions import AnchorError, JJSliceError
from .adapter import VersionEngineAdapter

DEFAULT_ANCHOR_PREFIX = "jjslice-move-tmp"


@dataclass(frozen=True)
class PinnedReference:
    """
    A temporary bookmark that keeps a stable handle on a revision.

    Folding into an ancestor rebases its descendants, which changes their
    commit ids. A bookmark follows the rewrite, so ``name`` can be used as a
    revision everywhere a revset is accepted.
    """

    name: str
    revision: str

    def __str__(self) -> str:
        return self.name


def anchor_name(prefix: str = DEFAULT_ANCHOR_PREFIX) -> str:
    """Unique bookmark name for a temporary anchor."""
    return f"{prefix}-{time_ns() // 1_000_000}-{os.urandom(3).hex()}"


@contextlib.contextmanager
def pinned_reference(
    adapter: VersionEngineAdapter,
    revision: str,
    prefix: str = DEFAULT_ANCHOR_PREFIX,
) -> Iterator[PinnedReference]:
    """
    Pin ``revision`` with a temporary anchor for the duration of the block.

    The anchor is deleted on exit whether the block succeeded or raised. A
    failure to delete it only propagates when nothing else is in flight.
    """
    reference = PinnedReference(anchor_name(prefix), revision)
    adapter.create_anchor(reference.name, revision)
    logger.debug(
        "Pinned {revision} as {anchor}", revision=revision, anchor=reference.name
    )

    in_flight = False
    try:
        yield reference
    except BaseException:
        in_flight = True
        raise
    finally:
        try:
            adapter.delete_anchor(reference.name)
            logger.debug("Released anchor {anchor}", anchor=reference.name)
        except JJSliceError as e:
            logger.error(f"Failed to delete temporary anchor {reference.name}: {e}")
            if not in_flight:
                raise AnchorError(
                    f"Could not delete temporary anchor {reference.name}",
                    f"Remove it with: jj bookmark delete {reference.name}",
                ) from e
