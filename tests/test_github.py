"""Tests for the gh-backed comment store and run context."""

import json
import subprocess
from unittest.mock import patch

import pytest

from tfreport.comment.reconcile import Comment
from tfreport.github.comments import GhCommentStore
from tfreport.github.context import load_context


def _done(stdout="", returncode=0, stderr=""):
    return subprocess.CompletedProcess(
        args=["gh"], returncode=returncode, stdout=stdout, stderr=stderr,
    )


class TestGhCommentStore:
    def test_rejects_bad_repo(self):
        with pytest.raises(ValueError):
            GhCommentStore("just-a-name")

    @patch("tfreport.github.comments.subprocess.run")
    def test_list_comments(self, mock_run):
        mock_run.return_value = _done(
            '{"id":1,"body":"hello"}\n{"id":2,"body":"<!-- @run-terraform -->"}\n'
        )
        comments = GhCommentStore("org/repo").list_comments(42)
        assert comments == [
            Comment(body="hello", id=1),
            Comment(body="<!-- @run-terraform -->", id=2),
        ]
        args = mock_run.call_args[0][0]
        assert args[:3] == ["gh", "api", "--paginate"]
        assert "repos/org/repo/issues/42/comments" in args

    @patch("tfreport.github.comments.subprocess.run")
    def test_list_comments_null_body(self, mock_run):
        mock_run.return_value = _done('{"id":3,"body":null}\n')
        assert GhCommentStore("org/repo").list_comments(1) == [Comment(body="", id=3)]

    @patch("tfreport.github.comments.subprocess.run")
    def test_create_comment(self, mock_run):
        mock_run.return_value = _done('{"id": 99, "body": "x"}')
        new_id = GhCommentStore("org/repo").create_comment(5, "multi\nline")
        assert new_id == 99
        args = mock_run.call_args[0][0]
        assert "POST" in args
        assert "repos/org/repo/issues/5/comments" in args
        assert json.loads(mock_run.call_args[1]["input"]) == {"body": "multi\nline"}

    @patch("tfreport.github.comments.subprocess.run")
    def test_update_comment(self, mock_run):
        mock_run.return_value = _done("{}")
        assert GhCommentStore("org/repo").update_comment(77, "b") == 77
        args = mock_run.call_args[0][0]
        assert "PATCH" in args
        assert "repos/org/repo/issues/comments/77" in args

    @patch("tfreport.github.comments.subprocess.run")
    def test_failure_raises(self, mock_run):
        mock_run.return_value = _done(returncode=1, stderr="HTTP 403: forbidden")
        with pytest.raises(RuntimeError, match="403"):
            GhCommentStore("org/repo").list_comments(1)


class TestContext:
    def test_from_environment(self, tmp_path):
        event = tmp_path / "event.json"
        event.write_text(json.dumps({"pull_request": {"number": 17}}))
        ctx = load_context({
            "GITHUB_REPOSITORY": "org/repo",
            "GITHUB_EVENT_NAME": "pull_request",
            "GITHUB_EVENT_PATH": str(event),
            "GITHUB_REF": "refs/pull/17/merge",
            "GITHUB_ACTOR": "octocat",
            "GITHUB_SHA": "abc",
        })
        assert ctx.repository == "org/repo"
        assert ctx.pull_request == 17
        assert ctx.is_pull_request
        assert ctx.actor == "octocat"

    def test_push_event_has_no_pull_request(self, tmp_path):
        event = tmp_path / "event.json"
        event.write_text(json.dumps({"ref": "refs/heads/main"}))
        ctx = load_context({"GITHUB_EVENT_NAME": "push", "GITHUB_EVENT_PATH": str(event)})
        assert ctx.pull_request is None
        assert not ctx.is_pull_request

    def test_empty_environment(self):
        ctx = load_context({})
        assert ctx.repository == ""
        assert ctx.pull_request is None
