"""Shared constants for the Compose Manager tools."""

from pathlib import Path

# Plugin locations (overridable via CmConfig / env vars)
COMPOSE_ROOT = Path("/boot/config/plugins/compose.manager/projects")
CONFIG_ROOT = Path("/boot/config/plugins/compose.manager")

# Per-project marker files
COMPOSE_FILE = "docker-compose.yml"
NAME_FILE = "name"
AUTOSTART_FILE = "autostart"
ICON_URL_FILE = "icon_url"
STARTED_AT_FILE = "started_at"
INDIRECT_FILE = "indirect"

# Local icon files, in lookup order
ICON_FILES = ("icon.png", "icon.jpg", "icon.gif", "icon.svg", "icon")

# Docker Compose label carrying the project name
COMPOSE_PROJECT_LABEL = "com.docker.compose.project"

# Update checks
UPDATE_STATUS_FILE = "update-status.json"

# Audit / logging
LOG_DIR = Path("/var/log/compose.manager")
AUDIT_JSONL_PATH = LOG_DIR / "audit.jsonl"
AUDIT_DB_PATH = Path("/var/lib/compose.manager/audit.db")
