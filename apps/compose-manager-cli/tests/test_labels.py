"""Tests for compose label parsing."""

from __future__ import annotations

from cm_common.labels import extract_project, group_by_project


class TestExtractProject:
    def test_project_first(self):
        assert extract_project("com.docker.compose.project=myapp,other=x") == "myapp"

    def test_project_in_middle(self):
        labels = "maintainer=me,com.docker.compose.project=media,com.docker.compose.service=plex"
        assert extract_project(labels) == "media"

    def test_project_last(self):
        assert extract_project("a=b,com.docker.compose.project=last") == "last"

    def test_missing_key(self):
        assert extract_project("com.docker.compose.service=web,other=x") is None

    def test_empty_and_none(self):
        assert extract_project("") is None
        assert extract_project(None) is None

    def test_garbage_does_not_raise(self):
        assert extract_project("}{not labels at all,,,=") is None
        assert extract_project("com.docker.compose.project=") is None


class TestGroupByProject:
    def test_groups_and_drops_unlabelled(self, make_container):
        containers = [
            make_container("web", name="a"),
            make_container("web", name="b", state="exited"),
            make_container("db", name="c"),
            make_container(None, name="loose"),
        ]
        grouped = group_by_project(containers)
        assert sorted(grouped) == ["db", "web"]
        assert [c.name for c in grouped["web"]] == ["a", "b"]

    def test_empty(self):
        assert group_by_project([]) == {}
