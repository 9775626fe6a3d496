"""API request models."""

from pydantic import BaseModel, Field

from .options import SnapshotRequest


class SnapshotBody(BaseModel):
    """Request body for the snapshot endpoints."""
    options: SnapshotRequest = Field(
        description="Classic, style or marker snapshot options, selected by 'kind'"
    )
