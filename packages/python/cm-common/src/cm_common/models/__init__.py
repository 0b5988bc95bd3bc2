"""Shared Pydantic models."""

from cm_common.models.audit_event import AuditEvent
from cm_common.models.container import Container
from cm_common.models.stack import (
    ContainerRow,
    Project,
    StackRow,
    StackStatus,
    StackSummary,
    Summary,
)

__all__ = [
    "AuditEvent",
    "Container",
    "ContainerRow",
    "Project",
    "StackRow",
    "StackStatus",
    "StackSummary",
    "Summary",
]
