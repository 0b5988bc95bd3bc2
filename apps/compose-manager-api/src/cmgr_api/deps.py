"""FastAPI dependencies for the stack collaborators."""

from __future__ import annotations

from cm_common import ProjectRegistry
from cm_common.summary import ContainerSource

from cmgr_api.config import settings
from cmgr_api.services import runtime


def get_registry() -> ProjectRegistry:
    return ProjectRegistry(settings.compose_root)


def get_container_source() -> ContainerSource:
    return runtime.list_containers
