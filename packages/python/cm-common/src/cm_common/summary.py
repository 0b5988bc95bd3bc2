"""Dashboard and list aggregation over projects and containers."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime
from typing import Any

from cm_common.images import normalize_image
from cm_common.labels import group_by_project
from cm_common.models.container import Container
from cm_common.models.stack import ContainerRow, Project, StackRow, StackSummary, Summary
from cm_common.registry import ProjectRegistry
from cm_common.status import classify
from cm_common.uptime import format_uptime

log = logging.getLogger(__name__)

ContainerSource = Callable[[], Iterable[Container]]


def bucket(running: int, total: int) -> str:
    if total > 0 and running == total:
        return "started"
    if running > 0:
        return "partial"
    return "stopped"


def build_summary(projects: Iterable[Project], containers: Iterable[Container]) -> Summary:
    """Count stacks per bucket; stacks without containers are stopped."""
    by_project = group_by_project(containers)
    summary = Summary()
    for project in projects:
        members = by_project.get(project.project_key, [])
        running = sum(1 for c in members if c.is_running)
        state = bucket(running, len(members))

        summary.total += 1
        setattr(summary, state, getattr(summary, state) + 1)
        summary.stacks.append(
            StackSummary(
                name=project.name,
                folder=project.folder,
                state=state,
                running=running,
                total=len(members),
                icon=project.icon_url,
            )
        )
    return summary


def build_stack_rows(
    projects: Iterable[Project],
    containers: Iterable[Container],
    update_status: Mapping[str, Any] | None = None,
    now: datetime | None = None,
) -> list[StackRow]:
    """Rows for the stack management table."""
    by_project = group_by_project(containers)
    update_status = update_status or {}
    rows = []
    for project in projects:
        members = by_project.get(project.project_key, [])
        running = sum(1 for c in members if c.is_running)
        update = update_status.get(project.folder)
        has_update = update.get("hasUpdate") if isinstance(update, dict) else None

        rows.append(
            StackRow(
                name=project.name,
                folder=project.folder,
                id=project.element_id,
                autostart=project.autostart,
                status=classify(members),
                uptime=format_uptime(project.started_at, now) if running else "",
                started_at=project.started_at,
                icon=project.icon_url,
                running=running,
                total=len(members),
                has_update=has_update if isinstance(has_update, bool) else None,
                containers=[
                    ContainerRow(
                        name=c.name,
                        image=c.image,
                        state=c.state,
                        status=c.status,
                        update_key=normalize_image(c.image),
                    )
                    for c in members
                ],
            )
        )
    return rows


def _safe_containers(source: ContainerSource) -> list[Container]:
    try:
        return list(source())
    except Exception as exc:
        log.warning("Container runtime query failed: %s", exc)
        return []


def _safe_projects(registry: ProjectRegistry) -> list[Project]:
    try:
        return list(registry.projects())
    except OSError as exc:
        log.warning("Project listing failed: %s", exc)
        return []


def collect_summary(registry: ProjectRegistry, source: ContainerSource) -> Summary:
    """One registry scan and one runtime query; failures give an empty summary."""
    projects = _safe_projects(registry)
    if not projects:
        return Summary()
    return build_summary(projects, _safe_containers(source))


def collect_stack_rows(
    registry: ProjectRegistry,
    source: ContainerSource,
    update_status: Mapping[str, Any] | None = None,
) -> list[StackRow]:
    projects = _safe_projects(registry)
    if not projects:
        return []
    return build_stack_rows(projects, _safe_containers(source), update_status)
