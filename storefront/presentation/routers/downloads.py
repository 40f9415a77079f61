"""Artifact download endpoint.

GET /download/{token} redeems a download token in two phases:
1. Reserve one use (validity check, nothing decremented)
2. Stream the artifact; the use is committed only after the last chunk was
   handed to the server, and released if the transfer fails or the client
   disconnects

Failures answer with fixed plain-text messages:
    404 not found, 410 expired, 429 limit reached, 500 artifact unavailable
"""

from collections.abc import AsyncIterator, Iterator

from fastapi import APIRouter, Depends
from fastapi.responses import Response, StreamingResponse
from starlette.concurrency import iterate_in_threadpool

from storefront.core.config import settings
from storefront.core.constants import ARTIFACT_MEDIA_TYPE, token_prefix
from storefront.core.container import (
    get_artifact_store,
    get_download_token_service,
    get_logger,
)
from storefront.core.result import Failure, Success
from storefront.domain.protocols import ArtifactStoreProtocol, LoggerProtocol
from storefront.infrastructure.security import DownloadTokenService
from storefront.presentation.errors import (
    artifact_error_response,
    token_error_response,
)

downloads_router = APIRouter(tags=["Downloads"])


@downloads_router.get(
    "/download/{token}",
    response_class=StreamingResponse,
    responses={
        200: {"content": {ARTIFACT_MEDIA_TYPE: {}}},
        404: {"content": {"text/plain": {}}},
        410: {"content": {"text/plain": {}}},
        429: {"content": {"text/plain": {}}},
        500: {"content": {"text/plain": {}}},
    },
)
async def download_artifact(
    token: str,
    downloads: DownloadTokenService = Depends(get_download_token_service),
    artifacts: ArtifactStoreProtocol = Depends(get_artifact_store),
    logger: LoggerProtocol = Depends(get_logger),
) -> Response:
    """Stream the purchased artifact for a valid download token.

    Args:
        token: Download token from the delivery email.
        downloads: Download token service (injected).
        artifacts: Artifact store (injected).
        logger: Logger (injected).

    Returns:
        StreamingResponse with the artifact as an attachment, or a
        plain-text error response.
    """
    match downloads.redeem(token):
        case Failure(error=error):
            logger.info(
                "Download rejected",
                token=token_prefix(token),
                error_code=error.code.value,
            )
            return token_error_response(error)
        case Success(value=grant):
            pass

    match artifacts.stream_artifact(grant.order_id):
        case Failure(error=artifact_error):
            downloads.release(token)
            logger.error(
                "Artifact unavailable",
                order_id=grant.order_id,
                error_code=artifact_error.code.value,
            )
            return artifact_error_response()
        case Success(value=chunks):
            pass

    return StreamingResponse(
        _stream_then_commit(token, chunks, downloads, logger),
        media_type=ARTIFACT_MEDIA_TYPE,
        headers={
            "Content-Disposition": (
                f'attachment; filename="{settings.artifact_download_name}"'
            ),
        },
    )


async def _stream_then_commit(
    token: str,
    chunks: Iterator[bytes],
    downloads: DownloadTokenService,
    logger: LoggerProtocol,
) -> AsyncIterator[bytes]:
    completed = False
    try:
        # File reads run in the threadpool; commit/release stay on the loop.
        async for chunk in iterate_in_threadpool(chunks):
            yield chunk
        completed = True
    finally:
        if completed:
            match downloads.commit(token):
                case Success(value=grant):
                    logger.info(
                        "Artifact downloaded",
                        order_id=grant.order_id,
                        token=token_prefix(token),
                        uses_remaining=downloads.uses_remaining(token) or 0,
                    )
                case Failure(error=error):
                    logger.warning(
                        "Download finished but use was not recorded",
                        token=token_prefix(token),
                        error_code=error.code.value,
                    )
        else:
            downloads.release(token)
            logger.warning("Download interrupted", token=token_prefix(token))
