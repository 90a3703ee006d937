"""Git repository lookups used for version resolution.

Only read operations are needed: the current branch and the release tags.
All operations return Result types.

Usage:
    repo = Repository(Path.cwd())
    match repo.tags_at_head():
        case Ok(tags):
            print(tags)
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from zci.core.result import Err, Ok, Result
from zci.platform.process import ProcessError
from zci.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0

__all__ = ["GitError", "Repository"]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """A git working tree.

    Attributes:
        path: Path to the repository root
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def current_branch(self) -> str | None:
        """Get current branch name.

        Returns None on a detached HEAD (the usual CI checkout) or on error.
        """
        result = self._run(["rev-parse", "--abbrev-ref", "HEAD"])
        match result:
            case Ok(stdout):
                branch = stdout.strip()
                return None if branch in ("", "HEAD") else branch
            case Err(_):
                return None

    def tags(self) -> Result[list[str], GitError]:
        """All tags in the repository."""
        return self._lines(["tag", "--list"], command="tag --list")

    def tags_at_head(self) -> Result[list[str], GitError]:
        """Tags pointing at the HEAD commit."""
        return self._lines(["tag", "--points-at", "HEAD"], command="tag --points-at HEAD")

    def _lines(self, args: list[str], *, command: str) -> Result[list[str], GitError]:
        result = self._run(args)
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command=command,
                        message=e.stderr.strip() or f"git {command} failed",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                return Ok([ln.strip() for ln in stdout.splitlines() if ln.strip()])

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        return run_process(
            ["git", "-C", str(self.path), *args], cwd=self.path, timeout=_GIT_TIMEOUT_SECONDS
        )
