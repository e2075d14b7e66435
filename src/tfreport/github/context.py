"""GitHub Actions run context.

Resolved from the variables the Actions runner exports:
    GITHUB_REPOSITORY — owner/name
    GITHUB_EVENT_NAME — push, pull_request, ...
    GITHUB_EVENT_PATH — JSON payload of the triggering event
    GITHUB_REF        — e.g. refs/heads/main
    GITHUB_ACTOR      — user that triggered the run
    GITHUB_SHA        — commit under test
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path


@dataclass
class GitHubContext:
    repository: str = ""
    event_name: str = ""
    ref: str = ""
    actor: str = ""
    sha: str = ""
    pull_request: int | None = None

    @property
    def is_pull_request(self) -> bool:
        return self.event_name == "pull_request"


def _pull_request_number(event_path: str | None) -> int | None:
    """Read the PR number from the event payload, if there is one."""
    if not event_path:
        return None
    path = Path(event_path)
    if not path.is_file():
        return None
    with open(path) as f:
        event = json.load(f)
    number = (event.get("pull_request") or {}).get("number")
    if number is None:
        number = (event.get("issue") or {}).get("number")
    return int(number) if number is not None else None


def load_context(environ: dict[str, str] | None = None) -> GitHubContext:
    """Build the run context from environment variables."""
    env = os.environ if environ is None else environ
    return GitHubContext(
        repository=env.get("GITHUB_REPOSITORY", ""),
        event_name=env.get("GITHUB_EVENT_NAME", ""),
        ref=env.get("GITHUB_REF", ""),
        actor=env.get("GITHUB_ACTOR", ""),
        sha=env.get("GITHUB_SHA", ""),
        pull_request=_pull_request_number(env.get("GITHUB_EVENT_PATH")),
    )
