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

import os
import subprocess
from pathlib import Path

from loguru import logger

from .interface import EngineInterface

# keep jj from opening pagers or editors while it is driven programmatically
_NON_INTERACTIVE_ENV = {
    "PAGER": "cat",
    "JJ_NO_PAGER": "1",
    "JJ_EDITOR": "cat",
    "EDITOR": "cat",
}


class SubprocessJJInterface(EngineInterface):
    def __init__(
        self,
        repo_path: str | Path | None = None,
        binary: str = "jj",
    ) -> None:
        # Ensure repo_path is a Path object for consistency
        if isinstance(repo_path, Path):
            self.repo_path = repo_path
        else:
            self.repo_path = Path(repo_path or ".")
        self.binary = binary

    def run_jj_text_out(
        self,
        args: list[str],
        input_text: str | None = None,
        env: dict | None = None,
        cwd: str | Path | None = None,
    ) -> str | None:
        result = self.run_jj_text(args, input_text, env, cwd)
        return result.stdout if result else None

    def run_jj_text(
        self,
        args: list[str],
        input_text: str | None = None,
        env: dict | None = None,
        cwd: str | Path | None = None,
    ) -> subprocess.CompletedProcess[str] | None:
        effective_cwd = str(cwd) if cwd is not None else str(self.repo_path)
        cmd = [self.binary] + args

        effective_env = {**os.environ, **_NON_INTERACTIVE_ENV, **(env or {})}

        try:
            logger.debug(f"Running jj command: {' '.join(cmd)} cwd={effective_cwd}")
            result = subprocess.run(
                cmd,
                input=input_text,
                text=True,
                encoding="utf-8",
                errors="replace",
                capture_output=True,
                check=True,
                env=effective_env,
                cwd=effective_cwd,
            )
            if result.stdout:
                logger.debug(
                    f"jj stdout: {result.stdout[:2000]}"
                    + ("...(truncated)" if len(result.stdout) > 2000 else "")
                )

            if result.stderr:
                logger.debug(
                    f"jj stderr: {result.stderr[:2000]}"
                    + ("...(truncated)" if len(result.stderr) > 2000 else "")
                )
            logger.debug(f"jj returncode: {result.returncode}")
            return result
        except subprocess.CalledProcessError as e:
            logger.warning(
                f"jj command failed: {' '.join(e.cmd)} code={e.returncode} stderr={e.stderr}"
            )
            return None
        except FileNotFoundError:
            logger.warning(f"jj binary not found: {self.binary}")
            return None
