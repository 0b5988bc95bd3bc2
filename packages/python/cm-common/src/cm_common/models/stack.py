"""Compose stack models: projects, derived statuses and summaries."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field

from cm_common.sanitize import element_id, sanitize_project_name

Bucket = Literal["started", "stopped", "partial"]


class Project(BaseModel):
    """A compose stack discovered in the projects folder."""

    folder: str
    name: str = ""
    icon_url: str = ""
    autostart: bool = False
    started_at: str | None = None
    base_path: Path | None = None

    def model_post_init(self, _context: Any) -> None:
        if not self.name:
            self.name = self.folder

    @property
    def project_key(self) -> str:
        """Compose project name, as it appears in container labels."""
        return sanitize_project_name(self.name)

    @property
    def element_id(self) -> str:
        return element_id(self.name)


class StackStatus(BaseModel):
    text: str
    css_class: str = Field(serialization_alias="class")


class StackSummary(BaseModel):
    """Dashboard tile entry for one stack."""

    name: str
    folder: str
    state: Bucket = "stopped"
    running: int = 0
    total: int = 0
    icon: str = ""


class Summary(BaseModel):
    """Dashboard payload: bucket counters plus one entry per stack."""

    total: int = 0
    started: int = 0
    stopped: int = 0
    partial: int = 0
    stacks: list[StackSummary] = Field(default_factory=list)


class ContainerRow(BaseModel):
    name: str
    image: str
    state: str
    status: str = ""
    update_key: str = ""


class StackRow(BaseModel):
    """Management table row for one stack."""

    name: str
    folder: str
    id: str
    autostart: bool = False
    status: StackStatus
    uptime: str = ""
    started_at: str | None = None
    icon: str = ""
    running: int = 0
    total: int = 0
    has_update: bool | None = None
    containers: list[ContainerRow] = Field(default_factory=list)
