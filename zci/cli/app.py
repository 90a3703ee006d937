from __future__ import annotations

import typer

from zci import __version__
from zci.cli.commands.publish_cmd import publish_to_artifactory


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command("publish-to-artifactory")(publish_to_artifactory)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_print_version,
        is_eager=True,
    ),
) -> None:
    """Release automation for built binaries."""


def main() -> None:
    app()
