"""Post an environment's results to its pull request.

Reads the thread, reconciles, then makes exactly one create-or-update
call. Callers must not run two posts for the same thread and
environment at once; the pipeline's per-environment concurrency group
provides that.
"""

from __future__ import annotations

from typing import Any, Protocol

from tfreport.comment import DEFAULT_MARKER
from tfreport.comment.reconcile import Comment, reconcile
from tfreport.comment.render import EnvironmentReport, render_section


class CommentStore(Protocol):
    def list_comments(self, thread: int) -> list[Comment]: ...
    def create_comment(self, thread: int, body: str) -> int: ...
    def update_comment(self, comment_id: int, body: str) -> int: ...


def post_section(
    store: CommentStore,
    thread: int,
    environment: str,
    section_body: str,
    marker: str = DEFAULT_MARKER,
    dry_run: bool = False,
    strict: bool = False,
) -> dict[str, Any]:
    """Reconcile a pre-rendered section into the thread's aggregate comment."""
    comments = store.list_comments(thread)
    comment_id, body = reconcile(
        comments, marker, environment, section_body, strict=strict,
    )

    if comment_id is None:
        action = "created"
        if not dry_run:
            comment_id = store.create_comment(thread, body)
    else:
        action = "updated"
        if not dry_run:
            store.update_comment(comment_id, body)

    return {
        "action": action,
        "comment_id": comment_id,
        "thread": thread,
        "environment": environment,
        "body": body,
        "dry_run": dry_run,
    }


def post_report(
    store: CommentStore,
    thread: int,
    report: EnvironmentReport,
    marker: str = DEFAULT_MARKER,
    dry_run: bool = False,
    strict: bool = False,
) -> dict[str, Any]:
    """Render a report and post it to the thread."""
    return post_section(
        store, thread, report.environment, render_section(report),
        marker=marker, dry_run=dry_run, strict=strict,
    )
