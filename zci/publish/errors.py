from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

PublishErrorKind = Literal[
    "missing_credential",
    "invalid_config",
    "version_unresolved",
    "release_dir_unreadable",
    "package_failed",
    "upload_failed",
    "build_failed",
]


@dataclass(frozen=True, slots=True)
class PublishError:
    kind: PublishErrorKind
    message: str
    hint: str | None = None
