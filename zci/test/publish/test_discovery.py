from __future__ import annotations

import os
from pathlib import Path

import pytest

from zci.core.result import Err, Ok
from zci.output.console import MockConsole
from zci.publish.discovery import artifact_name, discover_artifacts, is_packaged


def _touch(path: Path, content: str = "bin") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_artifact_name_strips_exe_suffix() -> None:
    assert artifact_name("ziti.exe") == "ziti"
    assert artifact_name("ziti") == "ziti"
    assert artifact_name("ziti.exe.sig") == "ziti.exe.sig"


def test_is_packaged() -> None:
    assert is_packaged("ziti.tar.gz") is True
    assert is_packaged("ziti.gz") is True
    assert is_packaged("ziti") is False
    assert is_packaged("ziti.tgz") is False


def test_discovers_exe_with_stripped_name(tmp_path: Path) -> None:
    release = tmp_path / "release"
    source = _touch(release / "amd64" / "linux" / "myapp.exe")

    result = discover_artifacts(release)

    assert isinstance(result, Ok)
    [artifact] = result.value
    assert artifact.name == "myapp"
    assert artifact.arch == "amd64"
    assert artifact.os == "linux"
    assert artifact.artifact_archive == "myapp.tar.gz"
    assert artifact.source_name == "myapp.exe"
    assert artifact.source_path == source
    assert artifact.artifact_path == source.parent / "myapp.tar.gz"


def test_skips_already_compressed_files(tmp_path: Path) -> None:
    release = tmp_path / "release"
    _touch(release / "amd64" / "linux" / "ziti")
    _touch(release / "amd64" / "linux" / "ziti.tar.gz")
    _touch(release / "amd64" / "linux" / "notes.gz")

    result = discover_artifacts(release)

    assert isinstance(result, Ok)
    assert [a.source_name for a in result.value] == ["ziti"]


def test_ignores_files_outside_the_two_level_layout(tmp_path: Path) -> None:
    release = tmp_path / "release"
    _touch(release / "ziti-all.tar.gz")
    _touch(release / "README")
    _touch(release / "amd64" / "stray-file")
    (release / "amd64" / "linux" / "nested").mkdir(parents=True)
    _touch(release / "amd64" / "linux" / "nested" / "deep")
    _touch(release / "amd64" / "linux" / "ziti")

    result = discover_artifacts(release)

    assert isinstance(result, Ok)
    assert [(a.arch, a.os, a.source_name) for a in result.value] == [("amd64", "linux", "ziti")]


def test_walk_order_is_sorted(tmp_path: Path) -> None:
    release = tmp_path / "release"
    _touch(release / "arm64" / "linux" / "ziti")
    _touch(release / "amd64" / "windows" / "ziti.exe")
    _touch(release / "amd64" / "linux" / "ziti-tunnel")
    _touch(release / "amd64" / "linux" / "ziti")

    result = discover_artifacts(release)

    assert isinstance(result, Ok)
    assert [(a.arch, a.os, a.name) for a in result.value] == [
        ("amd64", "linux", "ziti"),
        ("amd64", "linux", "ziti-tunnel"),
        ("amd64", "windows", "ziti"),
        ("arm64", "linux", "ziti"),
    ]


def test_empty_release_dir_has_no_artifacts(tmp_path: Path) -> None:
    release = tmp_path / "release"
    release.mkdir()

    result = discover_artifacts(release)

    assert isinstance(result, Ok)
    assert result.value == []


def test_missing_release_dir_is_fatal(tmp_path: Path) -> None:
    result = discover_artifacts(tmp_path / "release")

    assert isinstance(result, Err)
    assert result.error.kind == "release_dir_unreadable"
    assert "release" in result.error.message


@pytest.mark.skipif(
    not hasattr(os, "geteuid") or os.geteuid() == 0,
    reason="needs POSIX permissions enforced for a non-root user",
)
@pytest.mark.parametrize("locked_rel", ["arm64", "amd64/linux"])
def test_unreadable_subdir_is_fatal(tmp_path: Path, locked_rel: str) -> None:
    release = tmp_path / "release"
    _touch(release / "amd64" / "darwin" / "ziti")
    _touch(release / "amd64" / "linux" / "ziti")
    _touch(release / "arm64" / "linux" / "ziti")
    locked = release / locked_rel
    locked.chmod(0)
    try:
        result = discover_artifacts(release)
    finally:
        locked.chmod(0o755)

    assert isinstance(result, Err)
    assert result.error.kind == "release_dir_unreadable"
    assert str(locked) in result.error.message


def test_reports_progress(tmp_path: Path) -> None:
    release = tmp_path / "release"
    _touch(release / "amd64" / "darwin" / "ziti")
    console = MockConsole()

    discover_artifacts(release, console=console)

    assert console.find("processing files for arch: amd64")
    assert console.find("processing files for: amd64/darwin")
