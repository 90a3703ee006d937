"""Build the PublishContext from config, environment and git state."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from zci.core.config import Config
from zci.core.result import Err, Ok, Result
from zci.git.repository import Repository
from zci.publish.errors import PublishError
from zci.publish.model import PublishContext
from zci.publish.versioning import (
    BUILD_NUMBER_ENV,
    is_release_branch,
    read_base_version,
    resolve_branch,
    resolve_build_number,
    resolve_versions,
)


def require_credential(config: Config, env: Mapping[str, str]) -> Result[str, PublishError]:
    var = config.artifactory.credential_env
    value = env.get(var)
    if not value:
        return Err(
            PublishError(
                kind="missing_credential",
                message=f"{var} not specified",
                hint=f"export {var} with an Artifactory API key",
            )
        )
    return Ok(value)


def resolve_context(
    *,
    config: Config,
    repo_root: Path,
    env: Mapping[str, str],
    branch: str | None = None,
    build_number: str | None = None,
    dry_run: bool = False,
) -> Result[PublishContext, PublishError]:
    """Check the credential, then resolve branch, version and build number.

    The credential is checked before anything touches git or the filesystem.
    """
    credential = require_credential(config, env)
    if isinstance(credential, Err):
        return credential

    repo = Repository(repo_root)
    resolved_branch = resolve_branch(repo, env, branch)
    if isinstance(resolved_branch, Err):
        return resolved_branch
    release = is_release_branch(resolved_branch.value, config.release_branches)

    base = read_base_version(repo_root, config.base_version)
    if isinstance(base, Err):
        return base
    versions = resolve_versions(repo, base.value)
    if isinstance(versions, Err):
        return versions

    number = resolve_build_number(env, build_number)
    if number is None and not release:
        return Err(
            PublishError(
                kind="version_unresolved",
                message=f"build number required for snapshot branch {resolved_branch.value}",
                hint=f"pass --build-number or set {BUILD_NUMBER_ENV}",
            )
        )

    return Ok(
        PublishContext(
            branch=resolved_branch.value,
            is_release_branch=release,
            version=str(versions.value.publish),
            build_number=number,
            credential=credential.value,
            dry_run=dry_run,
        )
    )
