"""tar.gz packaging of discovered artifacts."""

from __future__ import annotations

import tarfile
from collections.abc import Sequence
from pathlib import Path

from zci.core.result import Err, Ok, Result
from zci.publish.errors import PublishError
from zci.publish.model import Artifact


def tar_gz(dest: Path, files: Sequence[tuple[Path, str]]) -> Result[Path, PublishError]:
    """Write a gzip-compressed tarball holding each (source, arcname) pair.

    An existing file at dest is replaced.
    """
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        # dereference: symlinked binaries are archived by content
        with tarfile.open(dest, "w:gz", dereference=True) as tar:
            for src, arcname in files:
                tar.add(src, arcname=arcname, recursive=False)
    except (OSError, tarfile.TarError) as e:
        return Err(
            PublishError(
                kind="package_failed",
                message=f"failed to create {dest}: {e}",
            )
        )
    return Ok(dest)


def package_artifact(artifact: Artifact) -> Result[Path, PublishError]:
    return tar_gz(artifact.artifact_path, [(artifact.source_path, artifact.source_name)])


def aggregate_member_name(artifact: Artifact) -> str:
    return f"{artifact.arch}/{artifact.os}/{artifact.source_name}"


def package_aggregate(dest: Path, artifacts: Sequence[Artifact]) -> Result[Path, PublishError]:
    """Bundle every artifact's source file into one archive, keyed by arch/os."""
    return tar_gz(dest, [(a.source_path, aggregate_member_name(a)) for a in artifacts])
