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
Partial moves of selected lines between adjacent revisions.

Moving to the ancestor is a single fold whose result for the file is pinned
to the reconstructed content. Moving to the descendant has to go through the
ancestor: the selected lines are removed from the ancestor by folding a
scratch revision into it, which also removes them from the descendant that
inherited them, and the descendant's previous content is then restored so the
lines reappear there as its own change.
"""

from collections.abc import Sequence

from loguru import logger

from jjslice.core.data.models import MoveDirection, MoveResult
from jjslice.core.data.revision import RevisionHandle
from jjslice.core.data.selection import ReconstructionRequest, SelectionRange
from jjslice.core.diff.hunk_parser import parse_hunks
from jjslice.core.engine_commands.adapter import VersionEngineAdapter
from jjslice.core.engine_commands.pinned_reference import (
    DEFAULT_ANCHOR_PREFIX,
    pinned_reference,
)
from jjslice.core.exceptions import JJSliceError
from jjslice.core.logging.utils import log_selections, time_block
from jjslice.core.reconstruct.selective import reconstruct


class PartialMovePipeline:
    def __init__(
        self,
        adapter: VersionEngineAdapter,
        working: RevisionHandle | None = None,
        anchor_prefix: str = DEFAULT_ANCHOR_PREFIX,
    ):
        self.adapter = adapter
        self.working = working or RevisionHandle()
        self.anchor_prefix = anchor_prefix

    def move_to_ancestor(
        self, path: str, selections: Sequence[SelectionRange]
    ) -> MoveResult:
        """Move the selected lines of ``path`` from the working revision into its parent."""
        source = self.working
        destination = source.parent
        log_selections("move to ancestor", path, list(selections))

        with time_block("move to ancestor"):
            wanted = self._wanted_content(
                path, base=destination, target=source, selections=selections
            )
            self.adapter.fold(
                str(source), str(destination), path, override_content=wanted
            )

        logger.info(
            "Moved selected lines of {path} into {destination}",
            path=path,
            destination=destination,
        )
        return MoveResult(
            direction=MoveDirection.TO_PARENT,
            path=path,
            committed_content=wanted,
            source_revision=str(source),
            destination_revision=str(destination),
        )

    def move_to_descendant(
        self, path: str, selections: Sequence[SelectionRange]
    ) -> MoveResult:
        """
        Move the selected lines of ``path`` out of the parent and into the working revision.

        The selection is expressed in the parent's coordinates (the target side
        of the grandparent-to-parent diff).
        """
        descendant = self.working
        ancestor = descendant.parent
        log_selections("move to descendant", path, list(selections))

        with time_block("move to descendant"):
            # the ancestor keeps everything that is not selected
            wanted = self._wanted_content(
                path,
                base=ancestor.parent,
                target=ancestor,
                selections=selections,
                inverse=True,
            )

            # @-relative revsets shift once a scratch revision becomes @
            ancestor_id = self.adapter.resolve_change_id(str(ancestor))
            # commit ids are immutable, so these still name the pre-move content
            snapshot = self.adapter.resolve_commit_id(str(descendant))
            ancestor_snapshot = self.adapter.resolve_commit_id(ancestor_id)

            with pinned_reference(
                self.adapter, str(descendant), self.anchor_prefix
            ) as anchor:
                self._rewrite_ancestor(path, ancestor_id, wanted, anchor.name)

                try:
                    self.adapter.set_working_revision(anchor.name)
                    self.adapter.restore_file(path, snapshot)
                except JJSliceError:
                    self._undo_ancestor_rewrite(
                        path, ancestor_id, ancestor_snapshot, anchor.name
                    )
                    raise

        logger.info(
            "Moved selected lines of {path} from {ancestor} into {descendant}",
            path=path,
            ancestor=ancestor,
            descendant=descendant,
        )
        return MoveResult(
            direction=MoveDirection.TO_CHILD,
            path=path,
            committed_content=wanted,
            source_revision=str(ancestor),
            destination_revision=str(descendant),
        )

    def move_file(
        self, paths: Sequence[str], from_revision: str, into_revision: str
    ) -> None:
        """Move the whole changes of ``paths`` from one revision into another."""
        for path in paths:
            self.adapter.fold(from_revision, into_revision, path)
        logger.info(
            "Moved {count} file(s) from {src} into {dst}",
            count=len(paths),
            src=from_revision,
            dst=into_revision,
        )

    # -------------------------------
    # Steps
    # -------------------------------

    def _wanted_content(
        self,
        path: str,
        base: RevisionHandle,
        target: RevisionHandle,
        selections: Sequence[SelectionRange],
        inverse: bool = False,
    ) -> str:
        # a path missing from the base is a newly added file
        base_content = self.adapter.get_content_at(str(base), path) or ""
        diff_text = self.adapter.get_diff(str(base), str(target), path)
        hunks = parse_hunks(diff_text)

        logger.debug(
            "Reconstructing {path}: hunks={hunks} inverse={inverse}",
            path=path,
            hunks=len(hunks),
            inverse=inverse,
        )
        return reconstruct(
            ReconstructionRequest(
                base_content=base_content,
                hunks=hunks,
                selections=selections,
                inverse=inverse,
            )
        )

    def _rewrite_ancestor(
        self, path: str, ancestor: str, wanted: str, anchor: str
    ) -> None:
        """Fold a scratch revision holding ``wanted`` into ``ancestor``."""
        scratch = None
        try:
            scratch = self.adapter.create_scratch(ancestor)
            self.adapter.write_file(path, wanted)
            self.adapter.fold(scratch, ancestor, path)
        except JJSliceError:
            logger.warning(
                "Rewriting {ancestor} failed, returning to {anchor}",
                ancestor=ancestor,
                anchor=anchor,
            )
            if scratch is not None:
                # the fold did not happen, so the scratch revision is still there
                self._discard_scratch(scratch)
            self.adapter.set_working_revision(anchor)
            raise

    def _discard_scratch(self, scratch: str) -> None:
        try:
            self.adapter.abandon(scratch)
        except JJSliceError as e:
            logger.error(f"Failed to abandon scratch revision {scratch}: {e}")

    def _undo_ancestor_rewrite(
        self, path: str, ancestor: str, ancestor_snapshot: str, anchor: str
    ) -> None:
        """Put ``path`` in ``ancestor`` back to its content at ``ancestor_snapshot``."""
        logger.warning(
            "Restoring {path} in the descendant failed, undoing the rewrite of {ancestor}",
            path=path,
            ancestor=ancestor,
        )
        try:
            self.adapter.set_working_revision(ancestor)
            self.adapter.restore_file(path, ancestor_snapshot)
        except JJSliceError as e:
            logger.error(
                f"Failed to restore {path} in {ancestor} from {ancestor_snapshot}: {e}"
            )
        try:
            self.adapter.set_working_revision(anchor)
        except JJSliceError as e:
            logger.error(f"Failed to return to {anchor}: {e}")
