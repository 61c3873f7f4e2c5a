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
from colorama import init
from dotenv import load_dotenv
from loguru import logger
from platformdirs import user_config_dir

from jjslice.commands import apply, config, move
from jjslice.constants import APP_NAME, CONFIG_FILENAME, ENV_PREFIX
from jjslice.context import GlobalConfig, GlobalContext
from jjslice.core.config.config_loader import ConfigLoader
from jjslice.core.exceptions import handle_jjslice_exception
from jjslice.core.logging.logging import setup_logger
from jjslice.runtimeutil import (
    ensure_utf8_output,
    get_log_dir_callback,
    setup_signal_handlers,
    version_callback,
)

# Initialize colorama for cross-platform colored output
init(autoreset=True)


# create app
app = typer.Typer(
    help="jjslice: move selected lines between jj revisions",
    pretty_exceptions_show_locals=False,
    pretty_exceptions_enable=False,
    add_completion=False,
)

# attach commands
app.command(name="move")(move.main)
app.command(name="move-file")(move.move_file)
app.command(name="apply")(apply.main)
app.command(name="config")(config.main)

# commands that run without a global context
standalone_commands = {"config", "apply"}


def setup_config_args(**kwargs):
    config_args = {}

    for key, item in kwargs.items():
        if item is not None:
            config_args[key] = item

    return config_args


@app.callback(invoke_without_command=True)
@handle_jjslice_exception
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    log_path: bool = typer.Option(
        False,
        "--log-dir",
        "-LD",
        callback=get_log_dir_callback,
        is_eager=True,
        help="Show log path (where logs for jjslice live) and exit",
    ),
    repo_path: str = typer.Option(
        ".",
        "--repo",
        help="Path to the jj repository to operate on.",
    ),
    custom_config: str | None = typer.Option(
        None,
        "--custom-config",
        help="Path to a custom config file",
    ),
    jj_binary: str | None = typer.Option(
        None,
        "--jj-binary",
        help="Name or path of the jj executable.",
    ),
    verbose: bool | None = typer.Option(
        None,
        "--verbose",
        "-v",
        help="Enable verbose logging.",
    ),
    silent: bool | None = typer.Option(
        None,
        "--silent",
        "-s",
        help="Do not output any text to the console.",
    ),
) -> None:
    """
    Global setup callback. Initialize shared objects here.
    """
    # skip --help in subcommands
    if any(arg in ctx.help_option_names for arg in ctx.args):
        return

    if ctx.invoked_subcommand is None:
        print(ctx.get_help())
        raise typer.Exit()

    # initial setup of logger, will be updated later if needed
    setup_logger(ctx.invoked_subcommand, debug=verbose or False, silent=silent or False)

    if ctx.invoked_subcommand == "config":
        return

    config_args = setup_config_args(
        jj_binary=jj_binary,
        verbose=verbose,
        silent=silent,
    )

    local_config_path = Path(repo_path) / CONFIG_FILENAME
    global_config_path = Path(user_config_dir(APP_NAME)) / CONFIG_FILENAME
    custom_config_path = Path(custom_config) if custom_config else None

    global_config, used_configs, used_defaults = ConfigLoader.get_full_config(
        GlobalConfig,
        config_args,
        local_config_path,
        ENV_PREFIX,
        global_config_path,
        custom_config_path,
    )

    setup_logger(
        ctx.invoked_subcommand,
        debug=global_config.verbose,
        silent=global_config.silent,
    )

    if used_defaults:
        logger.debug("Some settings were not configured. Using default values.")
    logger.debug(f"Used {used_configs} to build global context.")

    if ctx.invoked_subcommand in standalone_commands:
        return

    ctx.obj = GlobalContext.from_global_config(global_config, Path(repo_path))


def run_app():
    """Run the application with global exception handling."""
    # force stdout to be utf8 as it can be weird with typers console.print sometimes
    ensure_utf8_output()
    # Set up signal handlers for graceful shutdown
    setup_signal_handlers()
    # load any .env files
    load_dotenv()
    # launch cli
    app(prog_name="jjslice")


if __name__ == "__main__":
    run_app()
