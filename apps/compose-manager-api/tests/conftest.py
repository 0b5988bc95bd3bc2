"""Shared API test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from cm_common import Container, ProjectRegistry
from cmgr_api.deps import get_container_source, get_registry
from cmgr_api.main import app


@pytest.fixture
def compose_root(tmp_path: Path) -> Path:
    root = tmp_path / "projects"
    root.mkdir()
    return root


@pytest.fixture
def containers() -> list[Container]:
    """Mutable container population served by the fake runtime."""
    return []


@pytest.fixture
def client(compose_root: Path, containers: list[Container]):
    app.dependency_overrides[get_registry] = lambda: ProjectRegistry(compose_root)
    app.dependency_overrides[get_container_source] = lambda: (lambda: containers)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_stack(compose_root: Path):
    def _make(folder: str, **files: str) -> Path:
        path = compose_root / folder
        path.mkdir()
        (path / "docker-compose.yml").write_text("services: {}\n")
        for name, content in files.items():
            (path / name).write_text(content)
        return path

    return _make


@pytest.fixture
def labelled():
    def _make(project: str, state: str = "running", name: str = "c") -> Container:
        return Container(name=name, image="nginx", state=state, labels=f"com.docker.compose.project={project}")

    return _make
