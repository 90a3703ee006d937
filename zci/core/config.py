"""Typed configuration loading.

`zci.toml` is optional. Every key has a default matching the layout the
publish command has always used, so a missing file is not an error.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .semver import parse_base_version
from .structured import StrDict, as_str_dict, get_str, get_str_list, get_table

__all__ = [
    "ArtifactoryConfig",
    "Config",
    "ConfigError",
    "CONFIG_FILE_NAME",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAME = "zci.toml"

DEFAULT_ARTIFACTORY_URL = "https://netfoundry.jfrog.io/netfoundry"
DEFAULT_JFROG_CLI = "jfrog-cli"
DEFAULT_BUILD_NAME = "ziti"
DEFAULT_CREDENTIAL_ENV = "JFROG_API_KEY"
DEFAULT_RELEASE_DIR = "release"
DEFAULT_RELEASE_BRANCHES = ("main", "master")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ArtifactoryConfig:
    """Where and how artifacts are published."""

    url: str = DEFAULT_ARTIFACTORY_URL
    cli: str = DEFAULT_JFROG_CLI
    build_name: str = DEFAULT_BUILD_NAME
    credential_env: str = DEFAULT_CREDENTIAL_ENV


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    release_dir: str = DEFAULT_RELEASE_DIR
    release_branches: tuple[str, ...] = DEFAULT_RELEASE_BRANCHES
    # major.minor; overrides the tag-derived next version when newer
    base_version: str | None = None
    artifactory: ArtifactoryConfig = field(default_factory=ArtifactoryConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a parsed TOML mapping.

        Raises:
            ValueError: If a value is present but malformed.
        """
        artifactory: StrDict = get_table(data, "artifactory") or {}

        branches = get_str_list(data, "release_branches")
        if "release_branches" in data and branches is None:
            raise ValueError("release_branches must be a list of strings")
        if branches == []:
            raise ValueError("release_branches must not be empty")

        base_version = get_str(data, "base_version")
        if base_version is not None and parse_base_version(base_version) is None:
            raise ValueError(f"base_version must look like <major>.<minor>, got {base_version!r}")

        return cls(
            release_dir=get_str(data, "release_dir") or DEFAULT_RELEASE_DIR,
            release_branches=tuple(branches) if branches is not None else DEFAULT_RELEASE_BRANCHES,
            base_version=base_version,
            artifactory=ArtifactoryConfig(
                url=get_str(artifactory, "url") or DEFAULT_ARTIFACTORY_URL,
                cli=get_str(artifactory, "cli") or DEFAULT_JFROG_CLI,
                build_name=get_str(artifactory, "build_name") or DEFAULT_BUILD_NAME,
                credential_env=get_str(artifactory, "credential_env") or DEFAULT_CREDENTIAL_ENV,
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and validate configuration from a TOML file.

    Args:
        path: Path to zci.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Like load_config, but a missing file yields the default Config."""
    if not path.exists():
        return Ok(Config())
    return load_config(path)
