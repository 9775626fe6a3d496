"""FastAPI route definitions for the snapshot service."""

import logging
from io import BytesIO
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from ..clients.snapshot import SnapshotClient, redact_access_token
from ..config import ConfigurationError
from ..errors import ServiceError, SnapshotError, TransportError
from ..models.requests import SnapshotBody

logger = logging.getLogger(__name__)

router = APIRouter()


# Dependency to get client instance (set in main.py)
_client: SnapshotClient = None


def get_client() -> SnapshotClient:
    """Get the snapshot client instance."""
    if _client is None:
        raise HTTPException(status_code=503, detail="Snapshot client not initialized")
    return _client


def set_client(client: SnapshotClient):
    """Set the snapshot client instance (called from main.py)."""
    global _client
    _client = client


def _status_for(error: SnapshotError) -> int:
    if isinstance(error, TransportError):
        return 504
    if isinstance(error, ServiceError) and error.status_code == 429:
        return 429
    return 502


@router.get("/health")
async def health_check(client: Annotated[SnapshotClient, Depends(get_client)]):
    """Health check endpoint - does NOT call the Static API."""
    return {
        "status": "ok",
        "api_endpoint": client.api_endpoint,
    }


@router.post("/snapshots/url")
async def snapshot_url(
    body: SnapshotBody,
    client: Annotated[SnapshotClient, Depends(get_client)],
):
    """Build the Static API URL for a snapshot without fetching it."""
    try:
        url = client.build_url(body.options)
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"url": url}


@router.post("/snapshots/image")
async def snapshot_image(
    body: SnapshotBody,
    client: Annotated[SnapshotClient, Depends(get_client)],
):
    """Fetch a snapshot and return it as PNG."""
    try:
        image = await client.fetch(body.options)
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except SnapshotError as e:
        logger.warning(f"Snapshot failed for {redact_access_token(client.build_url(body.options))}: {e}")
        raise HTTPException(status_code=_status_for(e), detail=e.to_dict())

    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return Response(content=buffer.getvalue(), media_type="image/png")
