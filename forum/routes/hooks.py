"""
Hook catalog routes

GET /api/v1/hooks         → every forum checkpoint with listener and fire counts
GET /api/v1/hooks/{name}  → a single checkpoint

Read-only: listeners are attached in code, never over HTTP.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from forum.dependencies import get_relay
from forum.hooks import names
from forum.hooks.relay import EventRelay

router = APIRouter(tags=["Hooks"])


class CheckpointResponse(BaseModel):
    checkpoint: str
    hook: str
    kind: str
    deprecated: bool
    listeners: int
    fired: int


def _build_response(relay: EventRelay, checkpoint: str) -> CheckpointResponse:
    hook = relay.hook_name(checkpoint)
    is_filter = checkpoint in names.FILTER_CHECKPOINTS
    registry = relay.registry
    return CheckpointResponse(
        checkpoint=checkpoint,
        hook=hook,
        kind="filter" if is_filter else "action",
        deprecated=checkpoint in names.DEPRECATED_CHECKPOINTS,
        listeners=len(registry.listeners(hook)),
        fired=registry.did_filter(hook) if is_filter else registry.did_action(hook),
    )


@router.get("/", response_model=list[CheckpointResponse])
async def list_checkpoints(relay: EventRelay = Depends(get_relay)) -> list[CheckpointResponse]:
    """List every forum checkpoint in catalog order."""
    return [_build_response(relay, checkpoint) for checkpoint in names.ALL_CHECKPOINTS]


@router.get("/{checkpoint}", response_model=CheckpointResponse)
async def get_checkpoint(checkpoint: str, relay: EventRelay = Depends(get_relay)) -> CheckpointResponse:
    """Get a single checkpoint by its bare name, e.g. ``init``."""
    if checkpoint not in names.ALL_CHECKPOINTS:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Checkpoint not found: {checkpoint}",
        )
    return _build_response(relay, checkpoint)
