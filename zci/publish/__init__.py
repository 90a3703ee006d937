"""Package release binaries and publish them to Artifactory."""

from zci.publish.artifactory import ArtifactRepository, JFrogCli
from zci.publish.context import resolve_context
from zci.publish.discovery import artifact_name, discover_artifacts, is_packaged
from zci.publish.errors import PublishError
from zci.publish.model import Artifact, PublishContext
from zci.publish.service import (
    PublishReport,
    PublishService,
    aggregate_destination_key,
    destination_key,
)

__all__ = [
    "Artifact",
    "ArtifactRepository",
    "JFrogCli",
    "PublishContext",
    "PublishError",
    "PublishReport",
    "PublishService",
    "aggregate_destination_key",
    "artifact_name",
    "destination_key",
    "discover_artifacts",
    "is_packaged",
    "resolve_context",
]
