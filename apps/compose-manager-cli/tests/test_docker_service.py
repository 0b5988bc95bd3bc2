"""Tests for the docker subprocess wrappers."""

from __future__ import annotations

import json
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from cmgr.errors import DockerError
from cmgr.services import docker


def _completed(stdout: str = "", returncode: int = 0, stderr: str = "") -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


PS_LINES = "\n".join(
    json.dumps(d)
    for d in [
        {"Names": "web", "Image": "nginx", "State": "running", "Status": "Up 1 hour",
         "Labels": "com.docker.compose.project=site"},
        {"Names": "db", "Image": "postgres", "State": "exited", "Status": "Exited (0)",
         "Labels": "com.docker.compose.project=site"},
    ]
)


class TestParsePsOutput:
    def test_parses_lines(self):
        containers = docker.parse_ps_output(PS_LINES)
        assert [c.name for c in containers] == ["web", "db"]
        assert containers[1].state == "exited"
        assert containers[0].project == "site"

    def test_skips_malformed(self):
        raw = PS_LINES + "\n{broken json\n\n"
        assert len(docker.parse_ps_output(raw)) == 2

    def test_empty(self):
        assert docker.parse_ps_output("") == []


class TestListContainers:
    def test_success(self):
        with patch("cmgr.services.docker.subprocess.run", return_value=_completed(PS_LINES)) as run:
            containers = docker.list_containers()
        assert len(containers) == 2
        assert run.call_args.args[0] == ["docker", "ps", "-a", "--format", "{{json .}}"]

    def test_daemon_error_gives_empty(self):
        with patch("cmgr.services.docker.subprocess.run", return_value=_completed(returncode=1, stderr="no daemon")):
            assert docker.list_containers() == []

    def test_missing_binary_gives_empty(self):
        with patch("cmgr.services.docker.subprocess.run", side_effect=FileNotFoundError("docker")):
            assert docker.list_containers() == []


class TestCompose:
    def test_up_command(self):
        with patch("cmgr.services.docker.subprocess.run", return_value=_completed()) as run:
            docker.compose_up(Path("/stacks/web/docker-compose.yml"), "web")
        assert run.call_args.args[0] == [
            "docker", "compose", "-f", "/stacks/web/docker-compose.yml", "-p", "web", "up", "-d",
        ]

    def test_down_and_pull(self):
        with patch("cmgr.services.docker.subprocess.run", return_value=_completed()) as run:
            docker.compose_down(Path("/s/docker-compose.yml"), "s")
            docker.compose_pull(Path("/s/docker-compose.yml"), "s")
        assert run.call_args_list[0].args[0][-1] == "down"
        assert run.call_args_list[1].args[0][-1] == "pull"

    def test_failure_raises_docker_error(self):
        err = subprocess.CalledProcessError(1, ["docker"], stderr="boom")
        with patch("cmgr.services.docker.subprocess.run", side_effect=err):
            with pytest.raises(DockerError, match="boom"):
                docker.compose_up(Path("/s/docker-compose.yml"), "s")
