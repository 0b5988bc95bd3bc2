"""Central configuration for Compose Manager tools."""

from __future__ import annotations

import os
import socket
from pathlib import Path

from pydantic import BaseModel, Field

from cm_common.constants import (
    AUDIT_DB_PATH,
    AUDIT_JSONL_PATH,
    COMPOSE_ROOT,
    CONFIG_ROOT,
    UPDATE_STATUS_FILE,
)


def _env_path(name: str, default: Path) -> Path:
    env = os.environ.get(name)
    return Path(env) if env else default


class CmConfig(BaseModel):
    """Runtime configuration resolved once at startup."""

    compose_root: Path = Field(default_factory=lambda: _env_path("CM_COMPOSE_ROOT", COMPOSE_ROOT))
    config_root: Path = Field(default_factory=lambda: _env_path("CM_CONFIG_ROOT", CONFIG_ROOT))
    host_id: str = Field(default_factory=lambda: os.environ.get("CM_HOST_ID") or socket.gethostname())
    audit_jsonl_path: Path = Field(default=AUDIT_JSONL_PATH)
    audit_db_path: Path = Field(default=AUDIT_DB_PATH)

    @property
    def update_status_path(self) -> Path:
        return self.config_root / UPDATE_STATUS_FILE
