"""Stack action history: appended to a JSONL file and a SQLite table."""

from __future__ import annotations

import getpass
import os
import sqlite3
import time
from contextlib import closing, contextmanager
from pathlib import Path
from typing import Any, Generator

from cm_common import AuditEvent, CmConfig

from cmgr.config import get_config

_SCHEMA = """
CREATE TABLE IF NOT EXISTS stack_actions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    timestamp TEXT NOT NULL,
    host_id TEXT NOT NULL,
    actor TEXT NOT NULL,
    action TEXT NOT NULL,
    stack TEXT NOT NULL DEFAULT '',
    params TEXT NOT NULL DEFAULT '{}',
    result TEXT NOT NULL DEFAULT 'success',
    error TEXT,
    duration_ms INTEGER
);
CREATE INDEX IF NOT EXISTS idx_stack_actions_stack ON stack_actions(stack);
CREATE INDEX IF NOT EXISTS idx_stack_actions_timestamp ON stack_actions(timestamp);
"""


def _current_actor() -> str:
    return os.environ.get("CM_ACTOR") or getpass.getuser()


def _connect(db_path: Path) -> sqlite3.Connection:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path))
    conn.executescript(_SCHEMA)
    return conn


def append_jsonl(path: Path, event: AuditEvent) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a") as f:
        f.write(event.to_jsonl() + "\n")


def insert_event(db_path: Path, event: AuditEvent) -> None:
    with closing(_connect(db_path)) as conn:
        conn.execute(
            """INSERT INTO stack_actions
               (timestamp, host_id, actor, action, stack, params, result, error, duration_ms)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                event.timestamp.isoformat(),
                event.host_id,
                event.actor,
                event.action,
                event.target,
                event.model_dump_json(include={"params"}),
                event.result,
                event.error,
                event.duration_ms,
            ),
        )
        conn.commit()


def recent_events(db_path: Path, stack: str | None = None, limit: int = 20) -> list[dict[str, Any]]:
    """Most recent actions first, optionally for a single stack."""
    if not db_path.exists():
        return []
    query = "SELECT timestamp, actor, action, stack, result, error, duration_ms FROM stack_actions"
    args: tuple[Any, ...] = ()
    if stack:
        query += " WHERE stack = ?"
        args = (stack,)
    query += " ORDER BY id DESC LIMIT ?"
    with closing(_connect(db_path)) as conn:
        conn.row_factory = sqlite3.Row
        return [dict(row) for row in conn.execute(query, (*args, limit))]


def record(event: AuditEvent, cfg: CmConfig | None = None) -> None:
    """Persist an event to both sinks."""
    cfg = cfg or get_config()
    append_jsonl(cfg.audit_jsonl_path, event)
    insert_event(cfg.audit_db_path, event)


@contextmanager
def audit(action: str, target: str = "", **params: Any) -> Generator[AuditEvent, None, None]:
    """Time the wrapped stack action and record its outcome."""
    cfg = get_config()
    event = AuditEvent(
        host_id=cfg.host_id,
        actor=_current_actor(),
        action=action,
        target=target,
        params=params,
    )
    start = time.monotonic()
    try:
        yield event
    except Exception as exc:
        event.result = "failure"
        event.error = str(exc)
        raise
    finally:
        event.duration_ms = int((time.monotonic() - start) * 1000)
        record(event, cfg)
