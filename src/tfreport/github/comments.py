"""Pull request comment store backed by the GitHub CLI.

Uses ``gh api`` so authentication follows whatever ``gh`` is configured
with (GH_TOKEN / GITHUB_TOKEN in Actions).
"""

from __future__ import annotations

import json
import subprocess

from tfreport.comment.reconcile import Comment


def _run_gh(args: list[str], payload: str | None = None) -> subprocess.CompletedProcess:
    """Run a gh command and return the result."""
    return subprocess.run(
        ["gh"] + args,
        input=payload,
        capture_output=True,
        text=True,
    )


def _check(result: subprocess.CompletedProcess, action: str) -> str:
    if result.returncode != 0:
        raise RuntimeError(f"{action} failed — {result.stderr.strip()}")
    return result.stdout


class GhCommentStore:
    """Issue/PR comments for a single repository ("owner/name")."""

    def __init__(self, repo: str):
        if "/" not in repo:
            raise ValueError(f"Repository must be 'owner/name', got {repo!r}")
        self.repo = repo

    def list_comments(self, thread: int) -> list[Comment]:
        """List all comments on an issue or pull request, oldest first."""
        stdout = _check(
            _run_gh([
                "api", "--paginate",
                f"repos/{self.repo}/issues/{thread}/comments",
                "--jq", ".[] | {id: .id, body: .body}",
            ]),
            f"Listing comments on {self.repo}#{thread}",
        )
        comments = []
        for line in stdout.splitlines():
            if not line.strip():
                continue
            data = json.loads(line)
            comments.append(Comment(body=data.get("body") or "", id=data["id"]))
        return comments

    def create_comment(self, thread: int, body: str) -> int:
        """Create a comment and return its id."""
        stdout = _check(
            _run_gh(
                [
                    "api", "-X", "POST",
                    f"repos/{self.repo}/issues/{thread}/comments",
                    "--input", "-",
                ],
                payload=json.dumps({"body": body}),
            ),
            f"Creating comment on {self.repo}#{thread}",
        )
        return json.loads(stdout)["id"]

    def update_comment(self, comment_id: int, body: str) -> int:
        """Replace a comment's body in place."""
        _check(
            _run_gh(
                [
                    "api", "-X", "PATCH",
                    f"repos/{self.repo}/issues/comments/{comment_id}",
                    "--input", "-",
                ],
                payload=json.dumps({"body": body}),
            ),
            f"Updating comment {comment_id} on {self.repo}",
        )
        return comment_id
