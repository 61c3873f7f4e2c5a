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
Logging configuration for the jjslice CLI application.

Console output goes through a rich Console so markup in messages renders,
and every run also writes a full debug log file under the user log
directory.
"""

from datetime import datetime
from pathlib import Path

from loguru import logger
from platformdirs import user_log_path
from rich.console import Console

LOG_DIR = user_log_path(appname="jjslice")


def setup_logger(command_name: str, debug: bool = False, silent: bool = False) -> Path:
    """
    Set up logging for a command.

    Args:
        command_name: Name of the command being executed
        debug: Show debug output on the console
        silent: Do not log anything to the console

    Returns:
        Path to the log file
    """
    LOG_DIR.mkdir(parents=True, exist_ok=True)

    # Clear existing sinks so we don't double-log across runs
    logger.remove()

    console = Console(stderr=True)

    def console_sink(message):
        text = message.record["message"].rstrip("\n")
        console.print(text)

    if not silent:
        logger.add(
            console_sink,
            level="DEBUG" if debug else "INFO",
            format="{message}",
            catch=True,
        )

    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    logfile = LOG_DIR / f"{command_name}_{timestamp}.log"

    logger.add(
        logfile,
        level="DEBUG",
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
        "{name}:{function}:{line} | {message} | {extra}",
        rotation="10 MB",
        retention="14 days",
        catch=True,
        backtrace=True,
        diagnose=False,
    )

    logger.debug(f"Initialized logger for {command_name} -> {logfile}")
    return logfile


def get_log_directory() -> Path:
    """Get the directory where log files are stored."""
    return LOG_DIR
