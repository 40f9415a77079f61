"""Artifact store implementations."""

from storefront.infrastructure.artifacts.file_artifact_store import FileArtifactStore

__all__ = ["FileArtifactStore"]
