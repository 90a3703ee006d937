"""Artifact repository access through the external jfrog-cli tool.

The publish workflow only depends on `ArtifactRepository`; `JFrogCli` is the
production implementation that shells out to `jfrog-cli rt ...`.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from zci.core.config import ArtifactoryConfig
from zci.core.result import Err, Ok, Result
from zci.output.console import ConsoleProtocol, Style
from zci.platform.process import run_silent
from zci.publish.errors import PublishError, PublishErrorKind

_MASK = "****"


class ArtifactRepository(Protocol):
    def upload(self, path: Path, destination: str, properties: str) -> Result[None, PublishError]:
        """Upload one file to `destination` (repo-relative key), tagged with properties."""
        ...

    def finalize_build(self, name: str, version: str) -> Result[None, PublishError]:
        """Record the uploads made so far as build `name`/`version`."""
        ...


@dataclass(frozen=True, slots=True)
class JFrogCli:
    """ArtifactRepository backed by `jfrog-cli rt`.

    Attributes:
        config: Server URL, binary name and build name.
        credential: API key passed with --apikey.
        build_number: Value of --build-number on every upload.
        cwd: Working directory for the external tool.
        console: Where command lines are echoed (credential masked).
        dry_run: Echo commands without running them.
    """

    config: ArtifactoryConfig
    credential: str
    build_number: str
    cwd: Path
    console: ConsoleProtocol
    dry_run: bool = False

    def upload_command(self, path: Path, destination: str, properties: str) -> list[str]:
        return [
            self.config.cli,
            "rt",
            "u",
            str(path),
            destination,
            "--apikey",
            self.credential,
            "--url",
            self.config.url,
            "--props",
            properties,
            f"--build-name={self.config.build_name}",
            f"--build-number={self.build_number}",
        ]

    def collect_env_command(self, name: str, version: str) -> list[str]:
        return [self.config.cli, "rt", "bce", name, version]

    def publish_build_command(self, name: str, version: str) -> list[str]:
        return [
            self.config.cli,
            "rt",
            "bp",
            "--apikey",
            self.credential,
            "--url",
            self.config.url,
            name,
            version,
        ]

    def upload(self, path: Path, destination: str, properties: str) -> Result[None, PublishError]:
        return self._exec(
            self.upload_command(path, destination, properties),
            kind="upload_failed",
            message=f"upload of {path.name} to {destination} failed",
        )

    def finalize_build(self, name: str, version: str) -> Result[None, PublishError]:
        self.console.info("Set build version")
        collected = self._exec(
            self.collect_env_command(name, version),
            kind="build_failed",
            message=f"collecting build environment for {name} {version} failed",
        )
        if isinstance(collected, Err):
            return collected

        self.console.info("Create build in Artifactory")
        return self._exec(
            self.publish_build_command(name, version),
            kind="build_failed",
            message=f"publishing build {name} {version} failed",
        )

    def masked(self, cmd: list[str]) -> str:
        return " ".join(_MASK if arg == self.credential else arg for arg in cmd)

    def _exec(
        self, cmd: list[str], *, kind: PublishErrorKind, message: str
    ) -> Result[None, PublishError]:
        self.console.print(self.masked(cmd), Style.DIM)
        if self.dry_run:
            return Ok(None)

        result = run_silent(cmd, cwd=self.cwd)
        if isinstance(result, Err):
            error = result.error
            hint = error.stderr.strip() or f"{self.config.cli} exited with {error.returncode}"
            return Err(PublishError(kind=kind, message=message, hint=hint))
        return Ok(None)
