"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from cm_common import CmConfig, Container, ProjectRegistry


@pytest.fixture
def tmp_config(tmp_path: Path) -> CmConfig:
    """Return a CmConfig pointing at temp directories."""
    (tmp_path / "projects").mkdir()
    (tmp_path / "config").mkdir()
    return CmConfig(
        compose_root=tmp_path / "projects",
        config_root=tmp_path / "config",
        host_id="test-nas",
        audit_jsonl_path=tmp_path / "log" / "audit.jsonl",
        audit_db_path=tmp_path / "lib" / "audit.db",
    )


@pytest.fixture
def registry(tmp_config: CmConfig) -> ProjectRegistry:
    return ProjectRegistry(tmp_config.compose_root)


@pytest.fixture
def make_stack(tmp_config: CmConfig):
    """Create a stack folder; ``files`` maps marker names to contents."""

    def _make(folder: str, compose: bool = True, **files: str) -> Path:
        path = tmp_config.compose_root / folder
        path.mkdir(parents=True)
        if compose:
            (path / "docker-compose.yml").write_text("services:\n  web:\n    image: nginx\n")
        for name, content in files.items():
            (path / name).write_text(content)
        return path

    return _make


@pytest.fixture
def make_container():
    """Build a Container labelled with a compose project."""

    def _make(project: str | None, state: str = "running", name: str = "c", image: str = "nginx") -> Container:
        labels = f"com.docker.compose.project={project},com.docker.compose.service=web" if project else ""
        return Container(name=name, image=image, state=state, labels=labels)

    return _make
