"""Aggregate pull request comment for Terraform runs.

One comment per pull request carries every environment's results.
Each environment owns a delimited sub-block:
    <!-- @run-terraform -->
    <!-- @run-terraform:start:dev -->
    ## Results for dev
    ...
    <!-- @run-terraform:end:dev -->

Anything outside an environment's markers is preserved untouched.
"""

from __future__ import annotations

import re

DEFAULT_MARKER = "<!-- @run-terraform -->"

_HTML_COMMENT = re.compile(r"^<!--\s*(.*?)\s*-->$", re.DOTALL)


def section_markers(overall_marker: str, environment: str) -> tuple[str, str]:
    """Derive the (start, end) marker pair for one environment.

    An HTML comment marker keeps its delimiters, so ``<!-- @x -->`` yields
    ``<!-- @x:start:dev -->``. Any other marker is suffixed directly.
    """
    match = _HTML_COMMENT.match(overall_marker)
    if match:
        tag = match.group(1)
        return (
            f"<!-- {tag}:start:{environment} -->",
            f"<!-- {tag}:end:{environment} -->",
        )
    return (
        f"{overall_marker}:start:{environment}",
        f"{overall_marker}:end:{environment}",
    )
