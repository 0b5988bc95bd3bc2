"""Compose Manager Common — shared models and stack logic for the CLI and API."""

from cm_common.constants import (
    AUDIT_DB_PATH,
    AUDIT_JSONL_PATH,
    COMPOSE_FILE,
    COMPOSE_ROOT,
    CONFIG_ROOT,
    ICON_FILES,
    LOG_DIR,
)
from cm_common.config import CmConfig
from cm_common.models import (
    AuditEvent,
    Container,
    ContainerRow,
    Project,
    StackRow,
    StackStatus,
    StackSummary,
    Summary,
)
from cm_common.registry import ProjectRegistry, load_update_status

__all__ = [
    "AUDIT_DB_PATH",
    "AUDIT_JSONL_PATH",
    "AuditEvent",
    "COMPOSE_FILE",
    "COMPOSE_ROOT",
    "CONFIG_ROOT",
    "CmConfig",
    "Container",
    "ContainerRow",
    "ICON_FILES",
    "LOG_DIR",
    "Project",
    "ProjectRegistry",
    "StackRow",
    "StackStatus",
    "StackSummary",
    "Summary",
    "load_update_status",
]
