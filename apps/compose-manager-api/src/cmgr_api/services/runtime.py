"""Container runtime queries through the Docker SDK."""

from __future__ import annotations

import logging

import docker

from cm_common import Container

from cmgr_api.config import settings

log = logging.getLogger(__name__)


def _client() -> docker.DockerClient:
    return docker.DockerClient(base_url=settings.docker_socket)


def list_containers() -> list[Container]:
    """All containers, or an empty list when the daemon is unreachable."""
    try:
        client = _client()
        try:
            return [Container.from_sdk(c) for c in client.containers.list(all=True)]
        finally:
            client.close()
    except docker.errors.DockerException as exc:
        log.warning("Docker unavailable: %s", exc)
        return []
