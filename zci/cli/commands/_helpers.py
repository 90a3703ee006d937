"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import typer

from zci.core.result import Err, Result
from zci.output.errors import print_publish_error, publish_error_exit_code
from zci.publish.errors import PublishError

if TYPE_CHECKING:
    from zci.cli.context import CLIContext


T = TypeVar("T")


def exit_on_error(result: Result[T, PublishError], ctx: CLIContext) -> T:
    """Return the Ok value, or report the error and exit with its mapped code.

    Replaces the common pattern:
        if isinstance(result, Err):
            ctx.console.error(result.error.message)
            raise typer.Exit(code=...)
        value = result.value
    """
    if isinstance(result, Err):
        print_publish_error(result.error, ctx.console)
        raise typer.Exit(code=publish_error_exit_code(result.error))
    return result.value
