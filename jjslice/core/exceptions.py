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
Custom exception hierarchy for the jjslice CLI application.

This module defines the exception hierarchy used across jjslice so the CLI
can tell user-facing failures (a failed engine step, a malformed diff, a bad
selection) apart from unexpected bugs.
"""

import contextlib
import functools

import typer
from loguru import logger


class JJSliceError(Exception):
    """
    Base exception for all jjslice-related errors.

    All jjslice-specific exceptions should inherit from this class
    to enable consistent error handling throughout the application.
    """

    def __init__(self, message: str, details: str = None):
        """
        Initialize a JJSliceError.

        Args:
            message: Main error message for the user
            details: Additional technical details for logging
        """
        self.message = message
        self.details = details
        super().__init__(message)


class EngineError(JJSliceError):
    """
    Errors related to the version engine.

    Raised when the jj binary is missing or the repository state
    is invalid for the requested operation.
    """

    pass


class EngineOperationError(EngineError):
    """
    A single version engine step failed.

    The step name (fold, create-scratch, restore-file, ...) is kept on the
    exception so callers can report exactly where a move stopped.
    """

    def __init__(self, step: str, message: str, details: str = None):
        self.step = step
        super().__init__(f"{step} failed: {message}", details)


class AnchorError(EngineError):
    """Raised when a temporary anchor bookmark cannot be released."""

    pass


class DiffParseError(JJSliceError):
    """
    Errors while turning diff text into hunks.

    Raised before any write happens, so a malformed diff never
    leaves a half-moved change behind.
    """

    pass


class ValidationError(JJSliceError):
    """
    Input validation errors.

    Raised when user input fails validation checks,
    such as invalid file paths, malformed line selections, etc.
    """

    pass


class ConfigurationError(JJSliceError):
    """
    Configuration-related errors.

    Raised when configuration files are invalid, missing,
    or contain incompatible settings.
    """

    pass


# Convenience functions for creating common errors
def engine_not_found(binary: str = "jj") -> EngineError:
    """Create an EngineError for when jj is not available."""
    return EngineError(
        f"{binary} is not installed or not in PATH",
        "Please install jujutsu and ensure it's available in your PATH environment variable",
    )


def not_jj_repository(path: str = ".") -> EngineError:
    """Create an EngineError for when not in a jj repository."""
    return EngineError(
        f"Not a jj repository: {path}",
        "Run 'jj git init' to initialize a repository or navigate to an existing one",
    )


def invalid_selection(text: str) -> ValidationError:
    """Create a ValidationError for an unparseable line selection."""
    return ValidationError(
        f"Invalid line selection: {text}",
        "Selections are line numbers or inclusive ranges such as 7 or 3-5",
    )


def path_not_found(path: str) -> ValidationError:
    """Create a ValidationError for non-existent paths."""
    return ValidationError(
        f"Path not found: {path}",
        "Please check that the path exists and is accessible",
    )


class _ExceptionHandler(contextlib.ContextDecorator):
    def __init__(self, exit_on_fail: bool = True):
        self.exit_on_fail = exit_on_fail

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            return False

        if issubclass(exc_type, KeyboardInterrupt):
            logger.info("\n[yellow]Operation cancelled by user[/yellow]")
            raise typer.Exit(130)

        if issubclass(exc_type, JJSliceError):
            logger.error(f"[red]Error:[/red] {exc.message}")
            if exc.details:
                logger.debug(f"Details: {exc.details}")
            if self.exit_on_fail:
                raise typer.Exit(1)

        return False


def handle_jjslice_exception(func=None, *, exit_on_fail: bool = True):
    """
    Log jjslice errors and turn them into a clean exit code.

    Works both as a decorator (with or without arguments) and as a
    ``with`` block.
    """
    if func is None:
        return _ExceptionHandler(exit_on_fail=exit_on_fail)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        with _ExceptionHandler(exit_on_fail=exit_on_fail):
            return func(*args, **kwargs)

    return wrapper
