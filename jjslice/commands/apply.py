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

from pathlib import Path

import typer
from loguru import logger

from jjslice.core.exceptions import handle_jjslice_exception, path_not_found
from jjslice.core.reconstruct.selective import apply_selected_lines
from jjslice.core.validation import parse_line_selections


def _help_callback(ctx: typer.Context, param, value: bool):
    if not value or ctx.resilient_parsing:
        return
    typer.echo(ctx.get_help())
    raise typer.Exit()


def _read_text(path: Path) -> str:
    if not path.is_file():
        raise path_not_found(str(path))
    # keep line endings as they are in the file
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


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
    base_file: Path = typer.Argument(..., help="File holding the base content"),
    diff_file: Path = typer.Argument(
        ..., help="Unified diff from the base content to the target content"
    ),
    lines: list[str] = typer.Option(
        ...,
        "--lines",
        "-l",
        help="Target lines to apply, 1-indexed and inclusive (e.g. 7 or 3-5). Repeatable.",
    ),
    inverse: bool = typer.Option(
        False, "--inverse", help="Apply every change except the selected ones."
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the result here instead of stdout."
    ),
) -> None:
    """Apply selected lines of a diff to a base file without touching a repository

    Examples:
        # Print the base with only target lines 3 to 5 applied
        jjslice apply old.py change.diff --lines 3-5

        # Write the base with everything but line 9 applied
        jjslice apply old.py change.diff --lines 9 --inverse -o new.py
    """
    selections = parse_line_selections(lines)
    base_content = _read_text(base_file)
    diff_text = _read_text(diff_file)

    result = apply_selected_lines(base_content, diff_text, selections, inverse)

    if output is None:
        typer.echo(result, nl=False)
        return

    with open(output, "w", encoding="utf-8", newline="") as f:
        f.write(result)
    logger.info(f"Wrote {output}")
