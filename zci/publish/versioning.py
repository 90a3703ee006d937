"""Branch, version and build-number resolution.

CI systems check out a detached HEAD, so the branch comes from the GitHub
Actions environment first and from git only as a fallback. Versions are
derived from `vX.Y.Z` tags:

- current: the highest release tag on HEAD, if any;
- next: the latest release tag with its patch bumped, raised to the
  configured `major.minor` base when that is newer (rolling minor/major).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from zci.core.result import Err, Ok, Result
from zci.core.semver import SemVer, highest, parse_base_version
from zci.git.repository import GitError, Repository
from zci.publish.errors import PublishError

VERSION_FILE = "version"
DEFAULT_NEXT_VERSION = SemVer(0, 1, 0)

BRANCH_ENV_VARS = ("GITHUB_HEAD_REF", "GITHUB_REF_NAME")
BUILD_NUMBER_ENV = "GITHUB_RUN_NUMBER"


@dataclass(frozen=True, slots=True)
class VersionInfo:
    current: SemVer | None
    next: SemVer

    @property
    def publish(self) -> SemVer:
        # current is None when HEAD is not tagged (e.g. PR builds)
        return self.current if self.current is not None else self.next


def is_release_branch(branch: str, release_branches: Sequence[str]) -> bool:
    return branch in release_branches


def resolve_branch(
    repo: Repository,
    env: Mapping[str, str],
    override: str | None = None,
) -> Result[str, PublishError]:
    if override:
        return Ok(override)
    for var in BRANCH_ENV_VARS:
        value = env.get(var, "").strip()
        if value:
            return Ok(value)

    branch = repo.current_branch()
    if branch is None:
        return Err(
            PublishError(
                kind="version_unresolved",
                message="could not determine current branch",
                hint="pass --branch or set GITHUB_REF_NAME",
            )
        )
    return Ok(branch)


def resolve_build_number(env: Mapping[str, str], override: str | None = None) -> str | None:
    if override:
        return override
    return env.get(BUILD_NUMBER_ENV, "").strip() or None


def read_base_version(
    repo_root: Path, configured: str | None
) -> Result[SemVer | None, PublishError]:
    """Base version from config, else from the `version` file, else None."""
    source = "base_version"
    text = configured
    if text is None:
        path = repo_root / VERSION_FILE
        if not path.is_file():
            return Ok(None)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            return Err(
                PublishError(kind="version_unresolved", message=f"failed to read {path}: {e}")
            )
        source = str(path)

    base = parse_base_version(text)
    if base is None:
        return Err(
            PublishError(
                kind="version_unresolved",
                message=f"invalid base version in {source}: {text.strip()!r}",
                hint="expected <major>.<minor>, e.g. 0.27",
            )
        )
    return Ok(base)


def _git_failed(e: GitError) -> PublishError:
    return PublishError(
        kind="version_unresolved",
        message=f"git {e.command} failed: {e.message}",
    )


def resolve_versions(
    repo: Repository, base: SemVer | None = None
) -> Result[VersionInfo, PublishError]:
    head_tags = repo.tags_at_head()
    if isinstance(head_tags, Err):
        return Err(_git_failed(head_tags.error))
    all_tags = repo.tags()
    if isinstance(all_tags, Err):
        return Err(_git_failed(all_tags.error))

    current = highest(head_tags.value)
    latest = highest(all_tags.value)

    candidates = [v for v in (latest.bump_patch() if latest else None, base) if v is not None]
    next_version = max(candidates, default=DEFAULT_NEXT_VERSION)

    return Ok(VersionInfo(current=current, next=next_version))
