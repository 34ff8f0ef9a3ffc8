"""Shared helpers for the CLI."""

from __future__ import annotations

from typing import NoReturn

import typer

from tagger.core.errors import ErrorCode
from tagger.output.console import ConsoleProtocol, Style
from tagger.services.tagging import TaggingError


def tagging_error_exit_code(error: TaggingError) -> ErrorCode:
    match error.kind:
        case "not_a_repository" | "detached_head":
            return ErrorCode.ENV_ERROR
        case "git_failed":
            return ErrorCode.GIT_ERROR
        case "network_failed":
            return ErrorCode.NETWORK_ERROR
        case "invalid_target" | "version_exists":
            return ErrorCode.USER_ERROR
        case "resolution_exhausted":
            return ErrorCode.RESOLUTION_ERROR


def exit_with_error(error: TaggingError, console: ConsoleProtocol) -> NoReturn:
    """Print the error (and hint) and exit with its mapped code."""
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)
    raise typer.Exit(code=int(tagging_error_exit_code(error)))
