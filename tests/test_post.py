"""Tests for posting reports to a pull request."""

import pytest

from tfreport.comment import DEFAULT_MARKER
from tfreport.comment.post import post_report, post_section
from tfreport.comment.reconcile import AmbiguousTarget, Comment, MalformedExistingComment
from tfreport.comment.render import render_section

from conftest import FakeStore


class TestPostSection:
    def test_creates_when_missing(self, store):
        result = post_section(store, 12, "dev", "ok", marker="<!-- @x -->")
        assert result["action"] == "created"
        assert result["comment_id"] == 1001
        assert store.created == [
            (12, "<!-- @x -->\n<!-- @x:start:dev -->\nok\n<!-- @x:end:dev -->"),
        ]
        assert store.updated == []

    def test_updates_when_present(self):
        store = FakeStore([Comment(body="<!-- @x -->", id=55)])
        result = post_section(store, 12, "dev", "ok", marker="<!-- @x -->")
        assert result["action"] == "updated"
        assert store.created == []
        assert store.updated == [
            (55, "<!-- @x -->\n<!-- @x:start:dev -->\nok\n<!-- @x:end:dev -->"),
        ]

    def test_exactly_one_write_per_call(self, store):
        post_section(store, 1, "dev", "a")
        post_section(store, 1, "prod", "b")
        post_section(store, 1, "dev", "c")
        assert len(store.created) == 1
        assert len(store.updated) == 2
        assert len(store.comments) == 1

    def test_dry_run_writes_nothing(self, store):
        result = post_section(store, 1, "dev", "a", dry_run=True)
        assert result["dry_run"] is True
        assert result["action"] == "created"
        assert result["body"].startswith(DEFAULT_MARKER)
        assert store.created == [] and store.updated == []

    def test_malformed_propagates_without_write(self):
        store = FakeStore([Comment(body="<!-- @x -->\n<!-- @x:start:dev -->", id=9)])
        with pytest.raises(MalformedExistingComment):
            post_section(store, 1, "dev", "ok", marker="<!-- @x -->")
        assert store.created == [] and store.updated == []

    def test_strict_ambiguous(self):
        store = FakeStore([
            Comment(body="<!-- @x -->", id=1),
            Comment(body="<!-- @x --> again", id=2),
        ])
        with pytest.raises(AmbiguousTarget):
            post_section(store, 1, "dev", "ok", marker="<!-- @x -->", strict=True)


class TestPostReport:
    def test_renders_report(self, store, dev_report):
        result = post_report(store, 7, dev_report)
        assert result["environment"] == "dev"
        body = store.created[0][1]
        assert render_section(dev_report) in body
        assert body.startswith(
            DEFAULT_MARKER + "\n<!-- @run-terraform:start:dev -->\n## Results for dev"
        )
