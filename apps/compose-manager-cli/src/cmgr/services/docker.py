"""Docker and Docker Compose subprocess wrappers."""

from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path

from cm_common import Container

from cmgr.errors import DockerError

log = logging.getLogger(__name__)


def _run(cmd: list[str], *, check: bool = True) -> subprocess.CompletedProcess[str]:
    try:
        return subprocess.run(cmd, check=check, capture_output=True, text=True)
    except subprocess.CalledProcessError as exc:
        raise DockerError(
            f"Command failed: {' '.join(cmd)}\nstderr: {exc.stderr}"
        ) from exc
    except FileNotFoundError as exc:
        raise DockerError(f"Command not found: {cmd[0]}") from exc


def parse_ps_output(raw: str) -> list[Container]:
    """Parse ``docker ps --format '{{json .}}'`` output, skipping bad lines."""
    containers: list[Container] = []
    for line in raw.strip().splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            data = json.loads(line)
        except json.JSONDecodeError:
            log.warning("Skipping malformed docker ps line: %s", line[:80])
            continue
        if isinstance(data, dict):
            containers.append(Container.from_ps_json(data))
    return containers


def list_containers() -> list[Container]:
    """All containers (``docker ps -a``); empty when Docker is unreachable."""
    try:
        result = _run(["docker", "ps", "-a", "--format", "{{json .}}"], check=False)
    except DockerError as exc:
        log.warning("Docker unavailable: %s", exc)
        return []
    if result.returncode != 0:
        log.warning("docker ps failed: %s", result.stderr.strip())
        return []
    return parse_ps_output(result.stdout)


def _compose(compose_file: Path, project: str, *args: str) -> list[str]:
    return ["docker", "compose", "-f", str(compose_file), "-p", project, *args]


def compose_up(compose_file: Path, project: str) -> None:
    _run(_compose(compose_file, project, "up", "-d"))


def compose_down(compose_file: Path, project: str) -> None:
    _run(_compose(compose_file, project, "down"))


def compose_pull(compose_file: Path, project: str) -> None:
    _run(_compose(compose_file, project, "pull"))
