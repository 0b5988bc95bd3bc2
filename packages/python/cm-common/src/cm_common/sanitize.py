"""Name sanitizers for compose project names, HTML ids and folders."""

from __future__ import annotations

import re
from pathlib import PurePosixPath


def sanitize_project_name(name: str) -> str:
    """Compose project name passed to ``docker compose -p``.

    Containers carry this value in their ``com.docker.compose.project`` label,
    so stack lookups go through it too.
    """
    return name.replace(".", "_").replace(" ", "_").replace("-", "_").lower()


def element_id(name: str) -> str:
    """HTML-safe element id: dots become dashes, spaces are dropped."""
    return name.replace(".", "-").replace(" ", "")


def sanitize_folder_name(stack_name: str) -> str:
    """Folder name for a new stack, free of quotes and shell metacharacters."""
    folder = stack_name
    for ch in ('"', "'", "&", "(", ")"):
        folder = folder.replace(ch, "")
    folder = re.sub(r" {2,}", " ", folder)
    return re.sub(r"\s", "_", folder)


def safe_basename(value: str) -> str:
    """Last path component, so ``../../etc/passwd`` becomes ``passwd``."""
    return PurePosixPath(value.replace("\\", "/")).name if value else ""
