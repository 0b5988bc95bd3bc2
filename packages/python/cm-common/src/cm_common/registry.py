"""File-backed project registry.

Each stack is a folder under the compose root. A folder counts as a stack when
it holds a ``docker-compose.yml`` or an ``indirect`` file whose content points
at the directory that really holds the compose file. Optional marker files
(``name``, ``autostart``, ``icon_url``, ``started_at``) carry metadata.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

from cm_common.constants import (
    AUTOSTART_FILE,
    COMPOSE_FILE,
    ICON_FILES,
    ICON_URL_FILE,
    INDIRECT_FILE,
    NAME_FILE,
    STARTED_AT_FILE,
)
from cm_common.models.stack import Project
from cm_common.sanitize import safe_basename, sanitize_folder_name

log = logging.getLogger(__name__)

_http_url = TypeAdapter(AnyHttpUrl)


def valid_icon_url(value: str | None) -> str:
    """Return ``value`` if it is an absolute http(s) URL, else ``""``."""
    if not value:
        return ""
    if not (value.startswith("http://") or value.startswith("https://")):
        return ""
    try:
        _http_url.validate_python(value)
    except ValidationError:
        return ""
    return value


def load_update_status(path: Path) -> dict[str, Any]:
    """Load ``{stack: {"hasUpdate": bool}}``; missing or malformed gives ``{}``."""
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        log.warning("Ignoring unreadable update status %s: %s", path, exc)
        return {}
    return data if isinstance(data, dict) else {}


class ProjectRegistry:
    """Projects stored as folders under ``compose_root``."""

    def __init__(self, compose_root: Path):
        self.compose_root = Path(compose_root)

    def project_dir(self, folder: str) -> Path:
        return self.compose_root / safe_basename(folder)

    def list_projects(self) -> list[str]:
        """Folder names under the compose root, sorted."""
        if not self.compose_root.is_dir():
            return []
        try:
            return sorted(p.name for p in self.compose_root.iterdir() if p.is_dir())
        except OSError as exc:
            log.warning("Cannot list %s: %s", self.compose_root, exc)
            return []

    def is_valid_stack(self, folder: str) -> bool:
        path = self.project_dir(folder)
        try:
            return (path / COMPOSE_FILE).is_file() or (path / INDIRECT_FILE).is_file()
        except OSError as exc:
            log.warning("Skipping unreadable stack %s: %s", path, exc)
            return False

    def read_marker(self, folder: str, name: str) -> str | None:
        """Trimmed content of a marker file, or None when absent/unreadable."""
        path = self.project_dir(folder) / name
        try:
            if not path.is_file():
                return None
            return path.read_text().strip()
        except (OSError, UnicodeDecodeError) as exc:
            log.warning("Cannot read %s: %s", path, exc)
            return None

    def base_path(self, folder: str) -> Path:
        """Directory holding the compose file, following ``indirect``."""
        indirect = self.read_marker(folder, INDIRECT_FILE)
        if indirect:
            return Path(indirect)
        return self.project_dir(folder)

    def compose_file(self, folder: str) -> Path:
        return self.base_path(folder) / COMPOSE_FILE

    def load_project(self, folder: str) -> Project:
        return Project(
            folder=folder,
            name=self.read_marker(folder, NAME_FILE) or folder,
            icon_url=valid_icon_url(self.read_marker(folder, ICON_URL_FILE)),
            autostart=self.read_marker(folder, AUTOSTART_FILE) == "true",
            started_at=self.read_marker(folder, STARTED_AT_FILE) or None,
            base_path=self.base_path(folder),
        )

    def projects(self) -> Iterator[Project]:
        """Every valid stack, in folder order."""
        for folder in self.list_projects():
            if self.is_valid_stack(folder):
                yield self.load_project(folder)

    def find_icon(self, folder: str) -> Path | None:
        """First local icon file in lookup order."""
        path = self.project_dir(folder)
        for icon in ICON_FILES:
            candidate = path / icon
            if candidate.is_file():
                return candidate
        return None

    def mark_started(self, folder: str, when: datetime | None = None) -> None:
        when = when or datetime.now(timezone.utc)
        stamp = when.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        (self.project_dir(folder) / STARTED_AT_FILE).write_text(stamp + "\n")

    def clear_started(self, folder: str) -> None:
        (self.project_dir(folder) / STARTED_AT_FILE).unlink(missing_ok=True)

    def create_stack(self, name: str, compose_text: str) -> Path:
        """Create a new stack folder directly under the compose root.

        Raises ValueError when the name leaves no usable folder name and
        FileExistsError when the folder is taken.
        """
        folder = sanitize_folder_name(name).replace("/", "").replace("\\", "")
        if folder in ("", ".", ".."):
            raise ValueError(f"Invalid stack name: {name!r}")
        path = self.compose_root / folder
        path.mkdir(parents=True)
        (path / COMPOSE_FILE).write_text(compose_text)
        (path / NAME_FILE).write_text(name + "\n")
        return path
