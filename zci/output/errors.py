"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from zci.core.errors import ErrorCode
from zci.output.console import Style
from zci.publish.errors import PublishError

if TYPE_CHECKING:
    from zci.output.console import ConsoleProtocol

__all__ = ["print_publish_error", "publish_error_exit_code"]


def print_publish_error(error: PublishError, console: ConsoleProtocol) -> None:
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def publish_error_exit_code(error: PublishError) -> int:
    """Get exit code for a publish error."""
    match error.kind:
        case "invalid_config":
            return int(ErrorCode.USER_ERROR)
        case "missing_credential" | "version_unresolved":
            return int(ErrorCode.ENV_ERROR)
        case "release_dir_unreadable" | "package_failed":
            return int(ErrorCode.IO_ERROR)
        case "upload_failed" | "build_failed":
            return int(ErrorCode.NETWORK_ERROR)
