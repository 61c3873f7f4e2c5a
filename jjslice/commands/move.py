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

import typer
from colorama import Fore, Style
from loguru import logger

from jjslice.context import GlobalContext, MoveContext
from jjslice.core.data.models import MoveDirection
from jjslice.core.data.revision import RevisionHandle
from jjslice.core.exceptions import handle_jjslice_exception
from jjslice.core.logging.utils import time_block
from jjslice.core.validation import (
    parse_line_selections,
    validate_jj_repository,
    validate_path,
)
from jjslice.pipelines.partial_move import PartialMovePipeline


def _help_callback(ctx: typer.Context, param, value: bool):
    if not value or ctx.resilient_parsing:
        return
    typer.echo(ctx.get_help())
    raise typer.Exit()


@handle_jjslice_exception
def main(
    ctx: typer.Context,
    help: bool = typer.Option(
        False,
        "--help",
        callback=_help_callback,
        is_eager=True,
        help="Show this message and exit.",
    ),
    path: str = typer.Argument(..., help="Repository-relative path of the file"),
    lines: list[str] = typer.Option(
        ...,
        "--lines",
        "-l",
        help="Lines to move, 1-indexed and inclusive (e.g. 7, 3-5 or 3-5,9). Repeatable.",
    ),
    to: MoveDirection = typer.Option(
        MoveDirection.TO_PARENT,
        "--to",
        help="Move the lines into the parent revision or into the child revision.",
    ),
    revision: str = typer.Option(
        "@",
        "--revision",
        "-r",
        help="Revision the move is relative to. Moving to the child moves lines from its parent into it.",
    ),
) -> None:
    """Move selected lines of a file between a revision and its parent

    With --to parent the lines are taken from the changes of REVISION.
    With --to child they are taken from the changes of REVISION's parent,
    numbered as in that parent.

    Examples:
        # Move lines 3 to 5 of the working copy change into its parent
        jjslice move src/app.py --lines 3-5

        # Move line 12 out of the parent into the working copy change
        jjslice move src/app.py --lines 12 --to child
    """
    global_context: GlobalContext = ctx.obj
    validate_jj_repository(global_context.adapter, global_context.config.jj_binary)

    selections = parse_line_selections(lines)
    if not selections:
        logger.warning("No lines selected, nothing to move")
        return

    move_context = MoveContext(
        path=validate_path(path),
        selections=tuple(selections),
        direction=to,
        working=RevisionHandle(revision),
    )
    logger.debug("Move command started", move_context=move_context)

    pipeline = PartialMovePipeline(
        global_context.adapter,
        working=move_context.working,
        anchor_prefix=global_context.config.anchor_prefix,
    )

    with time_block("Partial Move E2E"):
        if move_context.direction is MoveDirection.TO_PARENT:
            result = pipeline.move_to_ancestor(
                move_context.path, move_context.selections
            )
        else:
            result = pipeline.move_to_descendant(
                move_context.path, move_context.selections
            )

    logger.info(
        f"{Fore.GREEN}Moved selected lines of {result.path}: "
        f"{result.source_revision} -> {result.destination_revision}{Style.RESET_ALL}"
    )


@handle_jjslice_exception
def move_file(
    ctx: typer.Context,
    help: bool = typer.Option(
        False,
        "--help",
        callback=_help_callback,
        is_eager=True,
        help="Show this message and exit.",
    ),
    paths: list[str] = typer.Argument(..., help="Repository-relative paths to move"),
    from_revision: str = typer.Option(
        "@", "--from", help="Revision whose changes are moved"
    ),
    into_revision: str = typer.Option(
        "@-", "--into", help="Revision that receives the changes"
    ),
) -> None:
    """Move the whole changes of one or more files into another revision

    Examples:
        # Move all changes to two files into the parent
        jjslice move-file src/a.py src/b.py

        # Move a file's changes from the parent back into the working copy
        jjslice move-file src/a.py --from @- --into @
    """
    global_context: GlobalContext = ctx.obj
    validate_jj_repository(global_context.adapter, global_context.config.jj_binary)

    cleaned = [validate_path(p) for p in paths]
    pipeline = PartialMovePipeline(
        global_context.adapter, anchor_prefix=global_context.config.anchor_prefix
    )

    with time_block("Move File E2E"):
        pipeline.move_file(cleaned, from_revision, into_revision)
