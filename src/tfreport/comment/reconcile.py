"""Reconcile one environment's results into the aggregate PR comment.

The reconcile process:
1. Pick the canonical comment (first one starting with the overall marker)
2. Derive the environment's start/end markers
3. Replace that environment's block, or append a new one
4. Hand back the comment id (None means create) and the new body

Pure text transform. Fetching and writing comments belongs to the caller.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from tfreport.comment import section_markers


class ReconcileError(ValueError):
    """Existing comment content cannot be reconciled safely."""


class MalformedExistingComment(ReconcileError):
    """Environment markers in the canonical comment are unbalanced or repeated."""


class AmbiguousTarget(ReconcileError):
    """More than one comment in the thread carries the overall marker."""


@dataclass(frozen=True)
class Comment:
    """A discussion-thread comment. ``id`` is None until the comment exists."""
    body: str
    id: int | None = None


def find_canonical(
    comments: Iterable[Comment],
    overall_marker: str,
    strict: bool = False,
) -> Comment | None:
    """Return the first comment whose body starts with the overall marker.

    Later matches are ignored unless ``strict`` is set, in which case
    AmbiguousTarget is raised.
    """
    matches = [c for c in comments if c.body.startswith(overall_marker)]
    if not matches:
        return None
    if strict and len(matches) > 1:
        ids = ", ".join(str(c.id) for c in matches)
        raise AmbiguousTarget(
            f"{len(matches)} comments start with {overall_marker!r} (ids: {ids})"
        )
    return matches[0]


def render_block(overall_marker: str, environment: str, section_body: str) -> str:
    """Wrap a section body in the environment's start/end markers."""
    start, end = section_markers(overall_marker, environment)
    return f"{start}\n{section_body}\n{end}"


def _marker_pattern(marker: str) -> re.Pattern:
    # A marker must end at whitespace or end of text, so "dev" never matches "dev2"
    return re.compile(re.escape(marker) + r"(?!\S)")


def _find_block(body: str, start: str, end: str) -> tuple[int, int] | None:
    """Locate the environment's block as a (begin, finish) span, or None.

    Raises:
        MalformedExistingComment: If either marker is repeated, unpaired,
            or the end marker precedes the start marker.
    """
    starts = list(_marker_pattern(start).finditer(body))
    ends = list(_marker_pattern(end).finditer(body))
    for marker, found in ((start, starts), (end, ends)):
        if len(found) > 1:
            raise MalformedExistingComment(
                f"Marker {marker!r} appears {len(found)} times in the existing comment"
            )
    if not starts and not ends:
        return None
    if not ends:
        raise MalformedExistingComment(
            f"Found {start!r} without a matching {end!r}"
        )
    if not starts or ends[0].start() < starts[0].end():
        raise MalformedExistingComment(
            f"Found {end!r} without a preceding {start!r}"
        )
    return starts[0].start(), ends[0].end()


def replace_section(
    body: str,
    overall_marker: str,
    environment: str,
    section_body: str,
) -> str:
    """Replace or append one environment's block within a comment body."""
    start, end = section_markers(overall_marker, environment)
    block = render_block(overall_marker, environment, section_body)

    span = _find_block(body, start, end)
    if span is None:
        return body + "\n" + block
    begin, finish = span
    return body[:begin] + block + body[finish:]


def reconcile(
    existing_comments: Iterable[Comment],
    overall_marker: str,
    environment: str,
    new_section_body: str,
    strict: bool = False,
) -> tuple[int | None, str]:
    """Produce the updated aggregate comment for one environment.

    Args:
        existing_comments: Comments in the thread, in listing order.
        overall_marker: Sentinel that the canonical comment starts with.
        environment: Deployment environment key (e.g. "dev").
        new_section_body: Rendered results for the environment.
        strict: Raise AmbiguousTarget instead of using the first match.

    Returns:
        (comment_id, body). A None id means a new comment must be created.

    Raises:
        MalformedExistingComment: If the environment's markers are broken.
        AmbiguousTarget: If strict and several canonical comments exist.
    """
    if not environment:
        raise ValueError("environment must not be empty")

    canonical = find_canonical(existing_comments, overall_marker, strict=strict)
    comment_id = canonical.id if canonical else None
    current = canonical.body if canonical else overall_marker

    return comment_id, replace_section(
        current, overall_marker, environment, new_section_body,
    )
