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

from abc import ABC, abstractmethod


class VersionEngineAdapter(ABC):
    """
    The operations a partial move needs from the version engine.

    Implementations raise EngineOperationError when a step fails. The one
    exception is get_content_at, which reports a path that does not exist at
    the revision by returning None.
    """

    @abstractmethod
    def get_content_at(self, revision: str, path: str) -> str | None:
        """Full text of ``path`` at ``revision``, or None when it does not exist there."""

    @abstractmethod
    def get_diff(self, from_revision: str, to_revision: str, path: str) -> str:
        """Unified (git style) diff of ``path`` between two revisions."""

    @abstractmethod
    def fold(
        self,
        from_revision: str,
        into_revision: str,
        path: str,
        override_content: str | None = None,
    ) -> None:
        """
        Move the changes to ``path`` in ``from_revision`` into ``into_revision``.
        When ``override_content`` is given, the folded file ends up with exactly
        that content instead of the plain merge result.
        """

    @abstractmethod
    def create_scratch(self, parent: str) -> str:
        """Create an empty revision on ``parent``, make it the working revision, return its id."""

    @abstractmethod
    def write_file(self, path: str, content: str) -> None:
        """Write ``path`` in the working copy of the current working revision."""

    @abstractmethod
    def create_anchor(self, name: str, revision: str) -> None:
        """Create a bookmark ``name`` pointing at ``revision``."""

    @abstractmethod
    def delete_anchor(self, name: str) -> None:
        """Delete the bookmark ``name``."""

    @abstractmethod
    def set_working_revision(self, revision: str) -> None:
        """Make ``revision`` the revision the working copy edits."""

    @abstractmethod
    def restore_file(self, path: str, from_revision: str) -> None:
        """Overwrite ``path`` in the working revision with its content at ``from_revision``."""

    @abstractmethod
    def resolve_commit_id(self, revision: str) -> str:
        """Immutable commit id of ``revision``, usable later as a content snapshot."""

    @abstractmethod
    def resolve_change_id(self, revision: str) -> str:
        """Change id of ``revision``; it stays valid when the revision is rewritten."""

    @abstractmethod
    def abandon(self, revision: str) -> None:
        """Discard ``revision``; its descendants are rebased onto its parent."""
