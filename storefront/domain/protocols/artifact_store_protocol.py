"""Artifact store protocol.

Serves the purchased file. Opening is separated from reading so a missing
artifact is reported before any response bytes are sent.

Implementations:
    - FileArtifactStore: storefront/infrastructure/artifacts/file_artifact_store.py
"""

from collections.abc import Iterator
from typing import Protocol

from storefront.core.result import Result
from storefront.domain.errors import ArtifactError


class ArtifactStoreProtocol(Protocol):
    """Purchased artifact source."""

    def stream_artifact(self, order_id: str) -> Result[Iterator[bytes], ArtifactError]:
        """Open the artifact for an order.

        Args:
            order_id: Order whose artifact is requested.

        Returns:
            Success with an iterator of byte chunks, or Failure if the
            artifact does not exist. Read errors raise OSError while
            iterating.
        """
        ...
