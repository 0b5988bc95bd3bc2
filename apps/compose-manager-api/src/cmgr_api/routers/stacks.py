"""Docker Compose stack status endpoints."""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from cm_common import ProjectRegistry, StackRow, Summary, load_update_status
from cm_common.sanitize import safe_basename
from cm_common.summary import ContainerSource, collect_stack_rows, collect_summary

from cmgr_api.config import settings
from cmgr_api.deps import get_container_source, get_registry

router = APIRouter(tags=["stacks"])

log = logging.getLogger(__name__)

_MAGIC = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
)


def sniff_image_type(path: Path, data: bytes) -> str:
    """Media type from magic bytes, falling back to the file extension."""
    for magic, media_type in _MAGIC:
        if data.startswith(magic):
            return media_type
    head = data[:512].lstrip().lower()
    if head.startswith(b"<svg") or (head.startswith(b"<?xml") and b"<svg" in head):
        return "image/svg+xml"
    guessed, _ = mimetypes.guess_type(path.name)
    return guessed or "application/octet-stream"


@router.get("/dashboard/stacks", response_model=Summary)
async def dashboard_stacks(
    registry: ProjectRegistry = Depends(get_registry),
    source: ContainerSource = Depends(get_container_source),
):
    """Stack counts per state for the dashboard tile."""
    return collect_summary(registry, source)


@router.get("/stacks", response_model=list[StackRow])
async def list_stacks(
    registry: ProjectRegistry = Depends(get_registry),
    source: ContainerSource = Depends(get_container_source),
):
    """Every stack with status, uptime and container details."""
    return collect_stack_rows(registry, source, load_update_status(settings.update_status_path))


@router.get("/stacks/{project}/icon")
async def stack_icon(
    project: str,
    registry: ProjectRegistry = Depends(get_registry),
):
    """Serve a stack's local icon file."""
    folder = safe_basename(project)
    if not folder or folder in (".", ".."):
        raise HTTPException(status_code=404, detail="Project not specified")
    if not registry.project_dir(folder).is_dir():
        raise HTTPException(status_code=404, detail=f"Project '{folder}' not found")
    icon = registry.find_icon(folder)
    if icon is None:
        raise HTTPException(status_code=404, detail=f"No icon for '{folder}'")
    try:
        data = icon.read_bytes()
    except OSError as exc:
        log.warning("Failed to read icon %s: %s", icon, exc)
        raise HTTPException(status_code=404, detail=f"No icon for '{folder}'") from exc
    return Response(
        content=data,
        media_type=sniff_image_type(icon, data),
        headers={"Cache-Control": "max-age=3600"},
    )
