"""Job gating decisions.

Each function answers whether a job in the Terraform pipeline runs:

    validate ─┐
              ├─> update PR comment   (pull requests only)
    plan ─────┤
              └─> apply or destroy ──> attest image (dev/test only)
"""

from __future__ import annotations

from tfreport.config import ATTEST_ENVIRONMENTS, RunSettings

PLAN_CHANGED = "2"


def should_comment(settings: RunSettings, event_name: str) -> bool:
    """PR comments are posted for pull_request events unless disabled."""
    return settings.add_comment_on_pr and event_name == "pull_request"


def should_apply(
    settings: RunSettings,
    ref: str,
    event_name: str,
    plan_exitcode: str,
) -> bool:
    """Apply (or destroy) only on push to the deploy branch with something to do."""
    if ref != settings.deploy_on or event_name != "push":
        return False
    return str(plan_exitcode).strip() == PLAN_CHANGED or settings.destroy


def apply_mode(settings: RunSettings) -> str:
    return "destroy" if settings.destroy else "apply"


def should_attest(settings: RunSettings, applied: bool) -> bool:
    """Attest the deployed image after a successful dev/test apply."""
    return (
        applied
        and settings.image_url != ""
        and settings.environment in ATTEST_ENVIRONMENTS
    )


def plan_file_name(environment: str) -> str:
    """Name of the saved plan handed from plan to apply."""
    return f"plan-{environment}.tfplan"


def concurrency_group(environment: str) -> str:
    """Jobs sharing this group never run at once, so state locks are not contended."""
    return environment
