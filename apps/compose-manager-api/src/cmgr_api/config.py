"""API configuration via environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings

from cm_common.constants import COMPOSE_ROOT, CONFIG_ROOT, UPDATE_STATUS_FILE


class Settings(BaseSettings):
    compose_root: Path = COMPOSE_ROOT
    config_root: Path = CONFIG_ROOT
    docker_socket: str = "unix:///var/run/docker.sock"
    cors_origins: list[str] = ["http://localhost"]

    model_config = {"env_prefix": "CM_"}

    @property
    def update_status_path(self) -> Path:
        return self.config_root / UPDATE_STATUS_FILE


settings = Settings()
