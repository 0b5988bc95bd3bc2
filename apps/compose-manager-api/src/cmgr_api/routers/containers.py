"""Container endpoints — live Docker queries."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from cm_common.summary import ContainerSource

from cmgr_api.deps import get_container_source

router = APIRouter(tags=["containers"])


@router.get("/containers")
async def list_containers(
    project: str | None = Query(default=None, description="Only this compose project"),
    source: ContainerSource = Depends(get_container_source),
):
    """List compose-managed containers with their parsed project label."""
    return [
        {
            "name": c.name,
            "image": c.image,
            "state": c.state,
            "status": c.status,
            "project": c.project,
        }
        for c in source()
        if c.project is not None and (project is None or c.project == project)
    ]
