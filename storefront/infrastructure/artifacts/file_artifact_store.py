"""Filesystem artifact store.

The storefront sells a single product, so every order maps to the same file.
"""

from collections.abc import Iterator
from pathlib import Path

from storefront.core.constants import ARTIFACT_CHUNK_SIZE
from storefront.core.enums import ErrorCode
from storefront.core.result import Failure, Result, Success
from storefront.domain.errors import ArtifactError


class FileArtifactStore:
    """Serves one file in fixed-size chunks (implements ArtifactStoreProtocol)."""

    def __init__(self, path: str | Path, chunk_size: int = ARTIFACT_CHUNK_SIZE) -> None:
        """Initialize the store.

        Args:
            path: Artifact file path.
            chunk_size: Bytes per yielded chunk.
        """
        self._path = Path(path)
        self._chunk_size = chunk_size

    def stream_artifact(self, order_id: str) -> Result[Iterator[bytes], ArtifactError]:
        """Open the artifact for reading.

        Args:
            order_id: Order the download belongs to.

        Returns:
            Success(chunk iterator) or Failure(ArtifactError) if the file is
            missing.
        """
        if not self._path.is_file():
            return Failure(
                error=ArtifactError(
                    code=ErrorCode.ARTIFACT_NOT_FOUND,
                    message="Artifact file is missing",
                    order_id=order_id,
                    details={"path": str(self._path)},
                )
            )
        return Success(value=self._read_chunks())

    def _read_chunks(self) -> Iterator[bytes]:
        with self._path.open("rb") as handle:
            while chunk := handle.read(self._chunk_size):
                yield chunk
