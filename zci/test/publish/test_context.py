from __future__ import annotations

from pathlib import Path

import pytest

from zci.core.config import ArtifactoryConfig, Config
from zci.core.result import Err, Ok
from zci.core.semver import SemVer
from zci.publish import context as context_mod
from zci.publish.versioning import VersionInfo


class _ExplodingRepository:
    def __init__(self, path: Path) -> None:
        raise AssertionError(f"git must not be consulted: {path}")


def _fixed_versions(info: VersionInfo):
    def fake_resolve_versions(repo: object, base: SemVer | None = None) -> Ok[VersionInfo]:
        del repo, base
        return Ok(info)

    return fake_resolve_versions


def test_missing_credential_stops_before_git(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setattr(context_mod, "Repository", _ExplodingRepository)

    result = context_mod.resolve_context(config=Config(), repo_root=tmp_path, env={})

    assert isinstance(result, Err)
    assert result.error.kind == "missing_credential"
    assert result.error.message == "JFROG_API_KEY not specified"


def test_empty_credential_counts_as_missing(tmp_path: Path) -> None:
    result = context_mod.resolve_context(
        config=Config(), repo_root=tmp_path, env={"JFROG_API_KEY": ""}
    )

    assert isinstance(result, Err)
    assert result.error.kind == "missing_credential"


def test_credential_env_name_is_configurable(tmp_path: Path) -> None:
    config = Config(artifactory=ArtifactoryConfig(credential_env="ARTIFACTORY_TOKEN"))

    result = context_mod.require_credential(config, {"ARTIFACTORY_TOKEN": "tok"})

    assert result == Ok("tok")


def test_release_branch_context(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(
        context_mod,
        "resolve_versions",
        _fixed_versions(VersionInfo(current=SemVer(1, 2, 3), next=SemVer(1, 2, 4))),
    )

    result = context_mod.resolve_context(
        config=Config(),
        repo_root=tmp_path,
        env={"JFROG_API_KEY": "secret", "GITHUB_REF_NAME": "main"},
    )

    assert isinstance(result, Ok)
    ctx = result.value
    assert ctx.branch == "main"
    assert ctx.is_release_branch is True
    assert ctx.publish_version == "1.2.3"
    assert ctx.channel == "ziti-staging"
    assert ctx.credential == "secret"
    assert ctx.dry_run is False


def test_dry_run_is_carried_on_the_context(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setattr(
        context_mod,
        "resolve_versions",
        _fixed_versions(VersionInfo(current=SemVer(1, 2, 3), next=SemVer(1, 2, 4))),
    )

    result = context_mod.resolve_context(
        config=Config(),
        repo_root=tmp_path,
        env={"JFROG_API_KEY": "secret"},
        branch="main",
        dry_run=True,
    )

    assert isinstance(result, Ok)
    assert result.value.dry_run is True


def test_snapshot_branch_appends_build_number(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setattr(
        context_mod,
        "resolve_versions",
        _fixed_versions(VersionInfo(current=None, next=SemVer(1, 3, 0))),
    )

    result = context_mod.resolve_context(
        config=Config(),
        repo_root=tmp_path,
        env={"JFROG_API_KEY": "secret", "GITHUB_RUN_NUMBER": "42"},
        branch="foo",
    )

    assert isinstance(result, Ok)
    assert result.value.version == "1.3.0"
    assert result.value.publish_version == "1.3.0-42"
    assert result.value.channel == "ziti-snapshot/foo"


def test_snapshot_branch_requires_build_number(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setattr(
        context_mod,
        "resolve_versions",
        _fixed_versions(VersionInfo(current=None, next=SemVer(1, 3, 0))),
    )

    result = context_mod.resolve_context(
        config=Config(),
        repo_root=tmp_path,
        env={"JFROG_API_KEY": "secret"},
        branch="foo",
    )

    assert isinstance(result, Err)
    assert result.error.kind == "version_unresolved"
    assert "GITHUB_RUN_NUMBER" in (result.error.hint or "")


def test_configured_release_branches(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(
        context_mod,
        "resolve_versions",
        _fixed_versions(VersionInfo(current=None, next=SemVer(2, 0, 0))),
    )

    result = context_mod.resolve_context(
        config=Config(release_branches=("release-next",)),
        repo_root=tmp_path,
        env={"JFROG_API_KEY": "secret"},
        branch="release-next",
    )

    assert isinstance(result, Ok)
    assert result.value.is_release_branch is True
    assert result.value.build_number is None
    assert result.value.publish_version == "2.0.0"
