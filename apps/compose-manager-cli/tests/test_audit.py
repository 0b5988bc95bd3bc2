"""Tests for the stack action audit trail."""

from __future__ import annotations

import json
import sqlite3
from pathlib import Path
from unittest.mock import patch

import pytest

from cm_common import AuditEvent, CmConfig
from cmgr.audit import append_jsonl, audit, insert_event, recent_events


class TestAuditSinks:
    def test_append_jsonl(self, tmp_path: Path):
        path = tmp_path / "log" / "audit.jsonl"
        for i in range(3):
            append_jsonl(path, AuditEvent(action=f"stack.{i}", target="s"))
        lines = path.read_text().strip().splitlines()
        assert len(lines) == 3
        assert json.loads(lines[0])["action"] == "stack.0"

    def test_insert_event(self, tmp_path: Path):
        db_path = tmp_path / "audit.db"
        insert_event(db_path, AuditEvent(action="stack.up", target="plex", actor="tester", host_id="nas"))
        conn = sqlite3.connect(str(db_path))
        rows = conn.execute("SELECT action, stack, actor, host_id FROM stack_actions").fetchall()
        conn.close()
        assert rows == [("stack.up", "plex", "tester", "nas")]

    def test_recent_events_filters_and_orders(self, tmp_path: Path):
        db_path = tmp_path / "audit.db"
        insert_event(db_path, AuditEvent(action="stack.up", target="a"))
        insert_event(db_path, AuditEvent(action="stack.up", target="b"))
        insert_event(db_path, AuditEvent(action="stack.down", target="a"))
        events = recent_events(db_path, stack="a")
        assert [e["action"] for e in events] == ["stack.down", "stack.up"]
        assert len(recent_events(db_path, limit=1)) == 1

    def test_recent_events_no_db(self, tmp_path: Path):
        assert recent_events(tmp_path / "missing.db") == []


class TestAuditContextManager:
    def test_success(self, tmp_config: CmConfig):
        with patch("cmgr.audit.get_config", return_value=tmp_config):
            with audit("stack.up", target="plex") as event:
                pass
        assert event.result == "success"
        assert event.host_id == "test-nas"
        assert event.duration_ms is not None
        data = json.loads(tmp_config.audit_jsonl_path.read_text().strip())
        assert data["action"] == "stack.up"

    def test_failure(self, tmp_config: CmConfig):
        with patch("cmgr.audit.get_config", return_value=tmp_config):
            with pytest.raises(ValueError):
                with audit("stack.down", target="plex") as event:
                    raise ValueError("compose failed")
        assert event.result == "failure"
        assert event.error == "compose failed"
        events = recent_events(tmp_config.audit_db_path)
        assert events[0]["result"] == "failure"
