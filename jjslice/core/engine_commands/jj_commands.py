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

import json
import sys
import tempfile
from pathlib import Path

from loguru import logger

from ..engine_interface.interface import EngineInterface
from ..exceptions import EngineOperationError
from .adapter import VersionEngineAdapter

MERGE_TOOL_NAME = "jjslice-partial"


class JJAdapter(VersionEngineAdapter):
    def __init__(self, jj: EngineInterface, repo_path: str | Path = "."):
        self.jj = jj
        self.repo_path = Path(repo_path)

    # -------------------------------
    # Helpers
    # -------------------------------

    def _run(self, step: str, args: list[str]) -> str:
        """Run a jj command, raising EngineOperationError tagged with ``step`` on failure."""
        output = self.jj.run_jj_text_out(args)
        if output is None:
            raise EngineOperationError(step, f"jj {' '.join(args)}")
        return output

    @staticmethod
    def _normalize_path(path: str) -> str:
        # jj expects workspace-relative paths with forward slashes
        return path.replace("\\", "/").strip()

    # -------------------------------
    # Reads
    # -------------------------------

    def get_content_at(self, revision: str, path: str) -> str | None:
        rel = self._normalize_path(path)
        # jj prints nothing for a path the revision does not have
        listed = self._run("get-content", ["file", "list", "-r", revision, rel])
        if not listed.strip():
            logger.debug(
                "No content for {path} at {revision}", path=path, revision=revision
            )
            return None
        return self._run("get-content", ["file", "show", "-r", revision, rel])

    def get_diff(self, from_revision: str, to_revision: str, path: str) -> str:
        return self._run(
            "get-diff",
            [
                "diff",
                "--git",
                "--from",
                from_revision,
                "--to",
                to_revision,
                self._normalize_path(path),
            ],
        )

    def resolve_commit_id(self, revision: str) -> str:
        return self._resolve("commit_id", revision)

    def resolve_change_id(self, revision: str) -> str:
        return self._resolve("change_id", revision)

    def _resolve(self, template: str, revision: str) -> str:
        resolved = self._run(
            "resolve-revision",
            ["log", "-r", revision, "--no-graph", "-T", template],
        ).strip()
        if not resolved:
            raise EngineOperationError(
                "resolve-revision", f"revision not found: {revision}"
            )
        return resolved

    # -------------------------------
    # Writes
    # -------------------------------

    def fold(
        self,
        from_revision: str,
        into_revision: str,
        path: str,
        override_content: str | None = None,
    ) -> None:
        rel_path = self._normalize_path(path)
        args = ["squash", "--from", from_revision, "--into", into_revision]

        if override_content is None:
            self._run("fold", args + [rel_path])
            return

        # jj has no direct "squash with this content" call, so a scripted merge
        # tool copies the wanted content over the right-hand snapshot.
        with tempfile.TemporaryDirectory(prefix="jjslice-partial-") as tmp_dir:
            wanted_file = Path(tmp_dir) / "wanted_content"
            with open(wanted_file, "w", encoding="utf-8", newline="") as f:
                f.write(override_content)

            args += _merge_tool_args(str(wanted_file), rel_path)
            args.append(rel_path)
            logger.debug(
                "Folding {path} from {src} into {dst} with pinned content",
                path=rel_path,
                src=from_revision,
                dst=into_revision,
            )
            self._run("fold", args)

    def create_scratch(self, parent: str) -> str:
        self._run("create-scratch", ["new", parent])
        return self.resolve_change_id("@")

    def write_file(self, path: str, content: str) -> None:
        abs_path = self.repo_path / self._normalize_path(path)
        try:
            abs_path.parent.mkdir(parents=True, exist_ok=True)
            with open(abs_path, "w", encoding="utf-8", newline="") as f:
                f.write(content)
        except OSError as e:
            raise EngineOperationError("write-file", str(e)) from e

    def create_anchor(self, name: str, revision: str) -> None:
        self._run("create-anchor", ["bookmark", "create", name, "-r", revision])

    def delete_anchor(self, name: str) -> None:
        self._run("delete-anchor", ["bookmark", "delete", name])

    def set_working_revision(self, revision: str) -> None:
        self._run("set-working-revision", ["edit", revision])

    def restore_file(self, path: str, from_revision: str) -> None:
        self._run(
            "restore-file",
            ["restore", "--from", from_revision, self._normalize_path(path)],
        )

    def abandon(self, revision: str) -> None:
        self._run("abandon", ["abandon", revision])

    def is_repository(self) -> bool:
        return self.jj.run_jj_text_out(["root"]) is not None


def _merge_tool_args(wanted_file: str, rel_path: str) -> list[str]:
    # during squash, $right is a directory snapshot; target the file within it
    if sys.platform == "win32":
        program = "cmd"
        dest = "$right\\" + rel_path.replace("/", "\\")
        edit_args = ["/c", "copy", "/Y", wanted_file, dest]
    else:
        program = "cp"
        dest = f"$right/{rel_path}"
        edit_args = [wanted_file, dest]

    return [
        "--tool",
        MERGE_TOOL_NAME,
        "--config",
        f'merge-tools.{MERGE_TOOL_NAME}.program="{program}"',
        "--config",
        f"merge-tools.{MERGE_TOOL_NAME}.edit-args={json.dumps(edit_args)}",
        "--config",
        'ui.editor="true"',
    ]
