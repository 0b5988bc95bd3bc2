"""Image reference normalization for update checks."""

from __future__ import annotations

_DOCKER_HUB_PREFIX = "docker.io/"
_DIGEST_MARKER = "@sha256:"


def normalize_image(image: str) -> str:
    """Canonical ``repo:tag`` key for an image reference.

    ``docker compose`` reports Docker Hub images as ``docker.io/...`` and
    pinned images with a digest suffix; both are stripped. Official images
    gain the ``library/`` namespace and untagged images ``:latest``.
    """
    image = image.strip()
    if image.startswith(_DOCKER_HUB_PREFIX):
        image = image[len(_DOCKER_HUB_PREFIX):]
    if _DIGEST_MARKER in image:
        image = image.split(_DIGEST_MARKER, 1)[0]
    if not image:
        return ""

    # A colon before the last slash belongs to a registry host:port
    repo, _, last = image.rpartition("/")
    if ":" in last:
        name, tag = last.split(":", 1)
    else:
        name, tag = last, "latest"
    repo = f"{repo}/{name}" if repo else name
    if "/" not in repo:
        repo = f"library/{repo}"
    return f"{repo}:{tag}"
