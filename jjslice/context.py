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
from pathlib import Path

from pydantic import BaseModel, Field

from jjslice.core.data.models import MoveDirection
from jjslice.core.data.revision import RevisionHandle
from jjslice.core.data.selection import SelectionRange
from jjslice.core.engine_commands.jj_commands import JJAdapter
from jjslice.core.engine_commands.pinned_reference import DEFAULT_ANCHOR_PREFIX
from jjslice.core.engine_interface.interface import EngineInterface
from jjslice.core.engine_interface.SubprocessJJInterface import (
    SubprocessJJInterface,
)


class GlobalConfig(BaseModel):
    jj_binary: str = Field(
        default="jj", description="Name or path of the jj executable"
    )
    anchor_prefix: str = Field(
        default=DEFAULT_ANCHOR_PREFIX,
        min_length=1,
        description="Prefix for the temporary bookmarks created while moving lines",
    )
    verbose: bool = Field(default=False, description="Enable verbose logging output")
    silent: bool = Field(
        default=False, description="Do not output any text to the console"
    )


@dataclass(frozen=True)
class GlobalContext:
    repo_path: Path
    config: GlobalConfig
    jj_interface: EngineInterface
    adapter: JJAdapter

    @classmethod
    def from_global_config(cls, config: GlobalConfig, repo_path: Path):
        jj_interface = SubprocessJJInterface(repo_path, binary=config.jj_binary)
        adapter = JJAdapter(jj_interface, repo_path)

        return GlobalContext(repo_path, config, jj_interface, adapter)


@dataclass(frozen=True)
class MoveContext:
    path: str
    selections: tuple[SelectionRange, ...] = ()
    direction: MoveDirection = MoveDirection.TO_PARENT
    working: RevisionHandle = field(default_factory=RevisionHandle)
