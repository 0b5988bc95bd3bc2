"""Container snapshot model as reported by the Docker runtime."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel

from cm_common.labels import extract_project
from cm_common.uptime import humanize_elapsed, parse_timestamp

# Docker reports nanoseconds; datetime stops at microseconds.
_NANOS = re.compile(r"(\.\d{6})\d+")
_ZERO_TIME = "0001-01-01T00:00:00Z"


def _docker_time(value: str | None) -> datetime | None:
    if not value or value == _ZERO_TIME:
        return None
    return parse_timestamp(_NANOS.sub(r"\1", value))


def describe_state(state: dict[str, Any], now: datetime | None = None) -> str:
    """Human status text in the shape ``docker ps`` prints it.

    ``state`` is the ``State`` block of a container inspect payload. Falls
    back to the bare state name when the timestamps are missing.
    """
    status = str(state.get("Status", ""))
    now = now or datetime.now(timezone.utc)
    if status in ("running", "paused"):
        started = _docker_time(state.get("StartedAt"))
        if started is None:
            return status
        text = "Up " + humanize_elapsed(int((now - started).total_seconds()))
        return text + " (Paused)" if status == "paused" or state.get("Paused") else text
    if status in ("exited", "restarting"):
        finished = _docker_time(state.get("FinishedAt"))
        if finished is None:
            return status
        ago = humanize_elapsed(int((now - finished).total_seconds()))
        return f"{status.capitalize()} ({state.get('ExitCode', 0)}) {ago} ago"
    return status.capitalize()


class Container(BaseModel):
    """One container from ``docker ps -a`` or the Docker SDK."""

    name: str = ""
    image: str = ""
    state: str = ""
    status: str = ""
    labels: str = ""

    @property
    def project(self) -> str | None:
        return extract_project(self.labels)

    @property
    def is_running(self) -> bool:
        return self.state == "running"

    @classmethod
    def from_ps_json(cls, data: dict[str, Any]) -> "Container":
        """Build from one decoded ``docker ps --format '{{json .}}'`` line."""
        return cls(
            name=str(data.get("Names", "")),
            image=str(data.get("Image", "")),
            state=str(data.get("State", "")),
            status=str(data.get("Status", "")),
            labels=str(data.get("Labels", "")),
        )

    @classmethod
    def from_sdk(cls, c: Any, now: datetime | None = None) -> "Container":
        """Build from a ``docker.models.containers.Container``.

        The SDK exposes labels as a dict; they are joined into the same
        ``key=value,key=value`` blob the CLI produces. The image name comes
        from the container config, which avoids an image lookup per container.
        ``status`` is rebuilt from the inspect ``State`` block so it reads like
        the CLI's ``Up 3 hours`` text.
        """
        labels = c.labels or {}
        state = dict(c.attrs.get("State") or {})
        state.setdefault("Status", c.status)
        return cls(
            name=c.name,
            image=c.attrs.get("Config", {}).get("Image", ""),
            state=c.status,
            status=describe_state(state, now),
            labels=",".join(f"{k}={v}" for k, v in labels.items()),
        )
