from __future__ import annotations

import os
from pathlib import Path

import typer

from zci.cli.commands._helpers import exit_on_error
from zci.cli.context import build_context
from zci.output.console import Style
from zci.publish.artifactory import JFrogCli
from zci.publish.context import resolve_context
from zci.publish.service import PublishService


def publish_to_artifactory(
    release_dir: Path | None = typer.Option(
        None,
        "--release-dir",
        help="Directory laid out as <arch>/<os>/<file> (default: release)",
    ),
    config: Path | None = typer.Option(None, "--config", help="Path to zci.toml"),
    branch: str | None = typer.Option(
        None, "--branch", help="Branch being built (overrides CI env and git)"
    ),
    build_number: str | None = typer.Option(
        None, "--build-number", help="CI build number (default: $GITHUB_RUN_NUMBER)"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Package, but print jfrog-cli commands without executing"
    ),
) -> None:
    """Publishes release artifacts to Artifactory."""
    ctx = build_context(config)

    publish_ctx = exit_on_error(
        resolve_context(
            config=ctx.config,
            repo_root=ctx.root,
            env=os.environ,
            branch=branch,
            build_number=build_number,
            dry_run=dry_run,
        ),
        ctx,
    )
    kind = "release" if publish_ctx.is_release_branch else "snapshot"
    ctx.console.print(
        f"branch: {publish_ctx.branch} ({kind}), version: {publish_ctx.publish_version}",
        Style.DIM,
    )
    if publish_ctx.dry_run:
        ctx.console.warning("dry run: jfrog-cli commands are printed, not executed")

    root = (ctx.root / (release_dir or Path(ctx.config.release_dir))).resolve()
    repository = JFrogCli(
        config=ctx.config.artifactory,
        credential=publish_ctx.credential,
        build_number=publish_ctx.version,
        cwd=ctx.root,
        console=ctx.console,
        dry_run=publish_ctx.dry_run,
    )
    service = PublishService(
        ctx=publish_ctx,
        repository=repository,
        release_dir=root,
        build_name=ctx.config.artifactory.build_name,
        console=ctx.console,
    )
    report = exit_on_error(service.run(), ctx)

    suffix = " (dry run)" if publish_ctx.dry_run else ""
    ctx.console.success(f"published {len(report.uploaded)} archive(s){suffix}")
    if report.build_recorded:
        build_name = ctx.config.artifactory.build_name
        ctx.console.success(f"build recorded: {build_name} {publish_ctx.publish_version}")
