"""Docker Compose label parsing."""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

from cm_common.constants import COMPOSE_PROJECT_LABEL

if TYPE_CHECKING:
    from cm_common.models.container import Container

_PROJECT_RE = re.compile(re.escape(COMPOSE_PROJECT_LABEL) + r"=([^,]+)")


def extract_project(labels: str | None) -> str | None:
    """Return the compose project from a ``key=value,...`` label blob, or None."""
    if not labels or not isinstance(labels, str):
        return None
    match = _PROJECT_RE.search(labels)
    return match.group(1) if match else None


def group_by_project(containers: Iterable["Container"]) -> dict[str, list["Container"]]:
    """Bucket containers by compose project; unlabelled ones are dropped."""
    grouped: dict[str, list[Container]] = {}
    for c in containers:
        project = c.project
        if project is None:
            continue
        grouped.setdefault(project, []).append(c)
    return grouped
