from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from zci.core.config import CONFIG_FILE_NAME, Config, load_config_or_default
from zci.core.result import Err
from zci.output.console import ConsoleProtocol, RichConsole
from zci.output.errors import print_publish_error, publish_error_exit_code
from zci.publish.errors import PublishError


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    config: Config
    console: ConsoleProtocol


def build_context(config_path: Path | None = None) -> CLIContext:
    """Load config relative to the current directory, or exit on a bad file."""
    console = RichConsole()
    root = Path.cwd()
    path = config_path if config_path is not None else root / CONFIG_FILE_NAME

    config_result = load_config_or_default(path)
    if isinstance(config_result, Err):
        error = PublishError(
            kind="invalid_config",
            message=config_result.error.message,
            hint=f"fix or remove {path}",
        )
        print_publish_error(error, console)
        raise typer.Exit(code=publish_error_exit_code(error))

    return CLIContext(root=root, config=config_result.value, console=console)
