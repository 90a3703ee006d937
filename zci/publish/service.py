"""The publish-to-artifactory workflow.

Strictly linear: discover, package each artifact, package the aggregate,
upload each archive, and on a release branch upload the aggregate and
record the build. The first failure aborts the run; nothing is retried or
rolled back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from zci.core.result import Err, Ok, Result
from zci.output.console import ConsoleProtocol
from zci.publish.artifactory import ArtifactRepository
from zci.publish.discovery import discover_artifacts
from zci.publish.errors import PublishError
from zci.publish.model import (
    AGGREGATE_NAME,
    ARCHIVE_SUFFIX,
    STAGING_CHANNEL,
    Artifact,
    PublishContext,
)
from zci.publish.packaging import package_aggregate, package_artifact

AGGREGATE_ARCHIVE = AGGREGATE_NAME + ARCHIVE_SUFFIX


def destination_key(ctx: PublishContext, artifact: Artifact) -> str:
    return "/".join(
        (
            ctx.channel,
            artifact.name,
            artifact.arch,
            artifact.os,
            ctx.publish_version,
            artifact.artifact_archive,
        )
    )


def aggregate_destination_key(ctx: PublishContext) -> str:
    v = ctx.publish_version
    return f"{STAGING_CHANNEL}/{AGGREGATE_NAME}/{v}/{AGGREGATE_NAME}.{v}{ARCHIVE_SUFFIX}"


def artifact_properties(ctx: PublishContext, artifact: Artifact) -> str:
    return (
        f"version={ctx.publish_version};name={artifact.name};"
        f"arch={artifact.arch};os={artifact.os};branch={ctx.branch}"
    )


def aggregate_properties(ctx: PublishContext) -> str:
    return f"version={ctx.publish_version};branch={ctx.branch}"


def _no_uploads() -> list[str]:
    return []


@dataclass
class PublishReport:
    artifacts: list[Artifact]
    aggregate_path: Path
    uploaded: list[str] = field(default_factory=_no_uploads)
    build_recorded: bool = False


class PublishService:
    def __init__(
        self,
        *,
        ctx: PublishContext,
        repository: ArtifactRepository,
        release_dir: Path,
        build_name: str,
        console: ConsoleProtocol,
    ) -> None:
        self._ctx = ctx
        self._repository = repository
        self._release_dir = release_dir
        self._build_name = build_name
        self._console = console

    @property
    def aggregate_path(self) -> Path:
        return self._release_dir / AGGREGATE_ARCHIVE

    def run(self) -> Result[PublishReport, PublishError]:
        self._console.header("Discovering artifacts")
        discovered = discover_artifacts(self._release_dir, console=self._console)
        if isinstance(discovered, Err):
            return discovered
        artifacts = discovered.value

        self._console.header("Packaging")
        for artifact in artifacts:
            self._console.info(
                f"packaging releasable: {artifact.source_path} -> {artifact.artifact_path}"
            )
            packaged = package_artifact(artifact)
            if isinstance(packaged, Err):
                return packaged

        aggregate = package_aggregate(self.aggregate_path, artifacts)
        if isinstance(aggregate, Err):
            return aggregate

        report = PublishReport(artifacts=artifacts, aggregate_path=self.aggregate_path)
        self._console.header("Publishing")
        for artifact in artifacts:
            dest = destination_key(self._ctx, artifact)
            self._console.info(f"Publish artifact for {artifact.name}")
            uploaded = self._repository.upload(
                artifact.artifact_path, dest, artifact_properties(self._ctx, artifact)
            )
            if isinstance(uploaded, Err):
                return uploaded
            report.uploaded.append(dest)

        if not self._ctx.is_release_branch:
            return Ok(report)

        dest = aggregate_destination_key(self._ctx)
        self._console.info(f"Publish artifact for {AGGREGATE_NAME}")
        uploaded = self._repository.upload(
            self.aggregate_path, dest, aggregate_properties(self._ctx)
        )
        if isinstance(uploaded, Err):
            return uploaded
        report.uploaded.append(dest)

        finalized = self._repository.finalize_build(self._build_name, self._ctx.publish_version)
        if isinstance(finalized, Err):
            return finalized
        report.build_recorded = True

        return Ok(report)
