from __future__ import annotations

import re
from dataclasses import dataclass

_TAG_RE = re.compile(r"^v?(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)$")
_BASE_RE = re.compile(r"^v?(0|[1-9]\d*)\.(0|[1-9]\d*)$")


@dataclass(frozen=True, slots=True, order=True)
class SemVer:
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def to_tag(self) -> str:
        return f"v{self}"

    def bump_patch(self) -> SemVer:
        return SemVer(self.major, self.minor, self.patch + 1)


def parse_tag(tag: str) -> SemVer | None:
    """Parse `v1.2.3` (or `1.2.3`); anything else, including pre-releases, is None."""
    m = _TAG_RE.match(tag.strip())
    if m is None:
        return None
    return SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)))


def parse_base_version(text: str) -> SemVer | None:
    """Parse a `major.minor` base version into its `.0` release."""
    m = _BASE_RE.match(text.strip())
    if m is None:
        return None
    return SemVer(int(m.group(1)), int(m.group(2)), 0)


def highest(tags: list[str]) -> SemVer | None:
    versions = [v for v in (parse_tag(t) for t in tags) if v is not None]
    return max(versions, default=None)
