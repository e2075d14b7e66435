"""Shared test fixtures for tfreport."""

from datetime import datetime
from pathlib import Path

import pytest

from tfreport.comment.reconcile import Comment
from tfreport.comment.render import EnvironmentReport

FIXTURES = Path(__file__).parent / "fixtures"


class FakeStore:
    """In-memory comment store that records every write."""

    def __init__(self, comments=None):
        self.comments = list(comments or [])
        self.created = []
        self.updated = []
        self._next_id = 1000

    def list_comments(self, thread):
        return list(self.comments)

    def create_comment(self, thread, body):
        self._next_id += 1
        self.created.append((thread, body))
        self.comments.append(Comment(body=body, id=self._next_id))
        return self._next_id

    def update_comment(self, comment_id, body):
        self.updated.append((comment_id, body))
        self.comments = [
            Comment(body=body, id=c.id) if c.id == comment_id else c
            for c in self.comments
        ]
        return comment_id


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def dev_report():
    return EnvironmentReport(
        environment="dev",
        format_outcome="success",
        init_outcome="success",
        validate_outcome="success",
        validate_stdout="Success! The configuration is valid.",
        plan_outcome="success",
        plan_stdout="Plan: 1 to add, 0 to change, 0 to destroy.",
        plan_exitcode="2",
        actor="octocat",
        working_directory="infra",
        sha="abc123",
        generated_at=datetime(2026, 10, 17, 9, 52, 0),
    )
