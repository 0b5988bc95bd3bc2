"""CLI configuration — singleton CmConfig resolved at startup."""

from __future__ import annotations

from functools import lru_cache

from cm_common import CmConfig, ProjectRegistry


@lru_cache(maxsize=1)
def get_config() -> CmConfig:
    """Return the global CmConfig (resolved once, cached)."""
    return CmConfig()


def get_registry() -> ProjectRegistry:
    return ProjectRegistry(get_config().compose_root)
