from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

ARCHIVE_SUFFIX = ".tar.gz"

STAGING_CHANNEL = "ziti-staging"
SNAPSHOT_CHANNEL = "ziti-snapshot"
AGGREGATE_NAME = "ziti-all"


@dataclass(frozen=True, slots=True)
class Artifact:
    """One releasable binary found under release/<arch>/<os>/."""

    name: str
    source_name: str
    source_path: Path
    artifact_archive: str
    artifact_path: Path
    arch: str
    os: str

    @classmethod
    def from_source(cls, source_path: Path, *, name: str, arch: str, os: str) -> Artifact:
        archive = name + ARCHIVE_SUFFIX
        return cls(
            name=name,
            source_name=source_path.name,
            source_path=source_path,
            artifact_archive=archive,
            artifact_path=source_path.parent / archive,
            arch=arch,
            os=os,
        )


@dataclass(frozen=True, slots=True)
class PublishContext:
    """Everything the publish steps need to know about the current build.

    Attributes:
        branch: Branch being built.
        is_release_branch: Whether uploads go to staging and a build is recorded.
        version: Resolved version, without any build-number suffix.
        build_number: CI build number (required on non-release branches).
        credential: Artifactory API key.
        dry_run: Print external commands instead of running them.
    """

    branch: str
    is_release_branch: bool
    version: str
    build_number: str | None
    credential: str
    dry_run: bool = False

    @property
    def publish_version(self) -> str:
        if self.is_release_branch:
            return self.version
        return f"{self.version}-{self.build_number}"

    @property
    def channel(self) -> str:
        if self.is_release_branch:
            return STAGING_CHANNEL
        return f"{SNAPSHOT_CHANNEL}/{self.branch}"
