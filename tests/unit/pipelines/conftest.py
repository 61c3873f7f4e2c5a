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

import difflib
import itertools

import pytest

from jjslice.core.engine_commands.adapter import VersionEngineAdapter
from jjslice.core.exceptions import EngineOperationError


class FakeRevision:
    def __init__(self, change_id: str, parent: "FakeRevision | None", files: dict):
        self.change_id = change_id
        self.parent = parent
        self.files = dict(files)
        self.commit_id = ""


class FakeJJ(VersionEngineAdapter):
    """
    In-memory stand-in for a jj repository holding a single chain of revisions.

    Rewriting a revision rebases its children: a child whose file was equal
    to the old parent content follows the new content, any other child keeps
    its own content. Every rewrite gives the revision a new commit id and the
    previous snapshots stay resolvable by their commit ids.
    """

    def __init__(self, chain: list[dict], fail_on=None):
        self.revisions: dict[str, FakeRevision] = {}
        self.snapshots: dict[str, dict] = {}
        self.bookmarks: dict[str, str] = {}
        # a step fails as many times as its count, a set fails each step once
        if isinstance(fail_on, dict):
            self.fail_on = dict(fail_on)
        else:
            self.fail_on = dict.fromkeys(fail_on or (), 1)
        self.calls: list[tuple] = []
        self._ids = itertools.count()

        parent = None
        for files in chain:
            parent = self._new_revision(parent, files)
        self.working = parent

    # -------------------------------
    # Helpers
    # -------------------------------

    def _new_revision(self, parent, files) -> FakeRevision:
        rev = FakeRevision(f"change{next(self._ids)}", parent, files)
        self.revisions[rev.change_id] = rev
        self._touch(rev)
        return rev

    def _touch(self, rev: FakeRevision) -> None:
        rev.commit_id = f"commit{next(self._ids)}"
        self.snapshots[rev.commit_id] = dict(rev.files)

    def _children(self, rev: FakeRevision) -> list[FakeRevision]:
        return [r for r in self.revisions.values() if r.parent is rev]

    def _rewrite(self, rev: FakeRevision, path: str, content: str | None) -> None:
        old = rev.files.get(path)
        if content is None:
            rev.files.pop(path, None)
        else:
            rev.files[path] = content
        self._touch(rev)
        for child in self._children(rev):
            if child.files.get(path) == old:
                self._rewrite(child, path, content)
            else:
                self._touch(child)

    def _check(self, step: str, *args) -> None:
        self.calls.append((step, *args))
        if self.fail_on.get(step, 0) > 0:
            self.fail_on[step] -= 1
            raise EngineOperationError(step, "injected failure")

    def resolve(self, revset: str) -> FakeRevision:
        symbol = revset.rstrip("-")
        depth = len(revset) - len(symbol)
        symbol = symbol.strip("()")

        if symbol == "@":
            rev = self.working
        elif symbol in self.bookmarks:
            rev = self.revisions[self.bookmarks[symbol]]
        elif symbol in self.revisions:
            rev = self.revisions[symbol]
        else:
            raise EngineOperationError("resolve-revision", f"unknown {revset}")

        for _ in range(depth):
            rev = rev.parent
        return rev

    def content(self, revset: str, path: str) -> str | None:
        return self.resolve(revset).files.get(path)

    # -------------------------------
    # VersionEngineAdapter
    # -------------------------------

    def get_content_at(self, revision: str, path: str) -> str | None:
        self._check("get-content", revision, path)
        return self.content(revision, path)

    def get_diff(self, from_revision: str, to_revision: str, path: str) -> str:
        self._check("get-diff", from_revision, to_revision, path)
        old = self.content(from_revision, path) or ""
        new = self.content(to_revision, path) or ""
        lines = difflib.unified_diff(
            old.splitlines(),
            new.splitlines(),
            f"a/{path}",
            f"b/{path}",
            lineterm="",
        )
        return "\n".join(lines)

    def fold(self, from_revision, into_revision, path, override_content=None):
        self._check("fold", from_revision, into_revision, path, override_content)
        source = self.resolve(from_revision)
        target = self.resolve(into_revision)
        source_content = source.files.get(path)
        wanted = source_content if override_content is None else override_content

        self._rewrite(target, path, wanted)
        # the source keeps whatever the fold did not take
        if source_content is None:
            source.files.pop(path, None)
        else:
            source.files[path] = source_content
        self._touch(source)

        if source.files == target.files and not self._children(source):
            # an emptied revision is abandoned and the working copy moves on
            del self.revisions[source.change_id]
            if self.working is source:
                self.working = self._new_revision(target, target.files)

    def create_scratch(self, parent: str) -> str:
        self._check("create-scratch", parent)
        base = self.resolve(parent)
        self.working = self._new_revision(base, base.files)
        return self.working.change_id

    def write_file(self, path: str, content: str) -> None:
        self._check("write-file", path, content)
        self.working.files[path] = content
        self._touch(self.working)

    def create_anchor(self, name: str, revision: str) -> None:
        self._check("create-anchor", name, revision)
        self.bookmarks[name] = self.resolve(revision).change_id

    def delete_anchor(self, name: str) -> None:
        self._check("delete-anchor", name)
        del self.bookmarks[name]

    def set_working_revision(self, revision: str) -> None:
        self._check("set-working-revision", revision)
        self.working = self.resolve(revision)

    def restore_file(self, path: str, from_revision: str) -> None:
        self._check("restore-file", path, from_revision)
        content = self.snapshots[from_revision].get(path)
        self._rewrite(self.working, path, content)

    def resolve_commit_id(self, revision: str) -> str:
        self._check("resolve-commit-id", revision)
        return self.resolve(revision).commit_id

    def resolve_change_id(self, revision: str) -> str:
        self._check("resolve-change-id", revision)
        return self.resolve(revision).change_id

    def abandon(self, revision: str) -> None:
        self._check("abandon", revision)
        rev = self.resolve(revision)
        for child in self._children(rev):
            child.parent = rev.parent
        del self.revisions[rev.change_id]
        if self.working is rev:
            self.working = self._new_revision(rev.parent, rev.parent.files)


@pytest.fixture
def make_repo():
    def factory(*contents: str | None, path: str = "file.txt", fail_on=None):
        chain = [{} if c is None else {path: c} for c in contents]
        return FakeJJ(chain, fail_on=fail_on)

    return factory
