"""Find releasable binaries in the release/<arch>/<os>/<file> tree."""

from __future__ import annotations

from pathlib import Path

from zci.core.result import Err, Ok, Result
from zci.output.console import ConsoleProtocol
from zci.publish.errors import PublishError
from zci.publish.model import Artifact

PACKAGED_SUFFIX = ".gz"
EXECUTABLE_SUFFIX = ".exe"


def artifact_name(file_name: str) -> str:
    """Name an artifact after its file, minus a Windows executable suffix."""
    return file_name.removesuffix(EXECUTABLE_SUFFIX)


def is_packaged(file_name: str) -> bool:
    """True for files that are already compressed (left over from an earlier run)."""
    return file_name.endswith(PACKAGED_SUFFIX)


def _list_dir(path: Path, *, what: str) -> Result[list[Path], PublishError]:
    try:
        return Ok(sorted(path.iterdir()))
    except OSError as e:
        return Err(
            PublishError(
                kind="release_dir_unreadable",
                message=f"failed to read {what} dir {path}: {e.strerror or e}",
            )
        )


def discover_artifacts(
    release_dir: Path,
    *,
    console: ConsoleProtocol | None = None,
) -> Result[list[Artifact], PublishError]:
    """Walk release_dir two levels deep and describe every releasable file.

    Non-directories at the arch and os levels are ignored. Any directory that
    cannot be read fails the whole walk.
    """
    arch_dirs = _list_dir(release_dir, what="release")
    if isinstance(arch_dirs, Err):
        return arch_dirs

    artifacts: list[Artifact] = []
    for arch_dir in arch_dirs.value:
        if not arch_dir.is_dir():
            continue
        arch = arch_dir.name
        if console is not None:
            console.info(f"processing files for arch: {arch}")

        os_dirs = _list_dir(arch_dir, what="arch")
        if isinstance(os_dirs, Err):
            return os_dirs

        for os_dir in os_dirs.value:
            if not os_dir.is_dir():
                continue
            os_name = os_dir.name
            if console is not None:
                console.info(f"processing files for: {arch}/{os_name}")

            files = _list_dir(os_dir, what="os")
            if isinstance(files, Err):
                return files

            for path in files.value:
                if path.is_dir() or is_packaged(path.name):
                    continue
                artifacts.append(
                    Artifact.from_source(
                        path,
                        name=artifact_name(path.name),
                        arch=arch,
                        os=os_name,
                    )
                )

    return Ok(artifacts)
