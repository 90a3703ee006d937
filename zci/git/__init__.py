"""Git operations module."""

from zci.git.repository import GitError, Repository

__all__ = ["GitError", "Repository"]
