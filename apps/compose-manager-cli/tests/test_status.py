"""Tests for stack status classification."""

from __future__ import annotations

import itertools

import pytest

from cm_common.status import classify, get_stack_status, state_flags


def _status(*flags: bool) -> tuple[str, str]:
    s = get_stack_status(*flags)
    return s.text, s.css_class


class TestGetStackStatus:
    @pytest.mark.parametrize("others", list(itertools.product([False, True], repeat=4)))
    def test_no_containers_is_stopped(self, others):
        assert _status(False, *others) == ("Stopped", "status-stopped")

    def test_exited_without_running(self):
        assert _status(True, False, True, False, False) == ("Exited", "status-exited")
        assert _status(True, False, True, True, True) == ("Exited", "status-exited")

    def test_all_running(self):
        assert _status(True, True, False, False, False) == ("Running", "status-running")

    def test_all_paused(self):
        assert _status(True, False, False, True, False) == ("Paused", "status-paused")

    def test_paused_with_running_is_partial(self):
        assert _status(True, True, False, True, False) == ("Partial", "status-partial")

    def test_paused_with_restarting_is_partial(self):
        # Partial is checked before Restarting
        assert _status(True, False, False, True, True) == ("Partial", "status-partial")

    def test_restarting(self):
        assert _status(True, False, False, False, True) == ("Restarting", "status-restarting")
        assert _status(True, True, False, False, True) == ("Restarting", "status-restarting")

    def test_mixed(self):
        assert _status(True, True, True, False, False) == ("Mixed", "status-mixed")
        assert _status(True, False, False, False, False) == ("Mixed", "status-mixed")

    def test_serializes_class_key(self):
        data = get_stack_status(True, True, False, False, False).model_dump(by_alias=True)
        assert data == {"text": "Running", "class": "status-running"}


class TestClassify:
    def test_empty_population(self):
        assert classify([]).text == "Stopped"

    def test_flags_from_states(self, make_container):
        containers = [make_container("x", "running"), make_container("x", "paused")]
        flags = state_flags(containers)
        assert flags.is_up and flags.is_running and flags.is_paused
        assert not flags.is_exited and not flags.is_restarting
        assert classify(containers).text == "Partial"

    def test_running_and_exited(self, make_container):
        containers = [make_container("x", "running"), make_container("x", "exited")]
        assert classify(containers).css_class == "status-mixed"

    def test_created_only(self, make_container):
        assert classify([make_container("x", "created")]).text == "Mixed"
