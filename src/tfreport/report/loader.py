"""Load an EnvironmentReport from a YAML (or JSON) file.

A report file holds the job outputs of one run, e.g.:

    environment: dev
    format_outcome: success
    init_outcome: success
    validate_outcome: success
    validate_stdout: "Success! The configuration is valid."
    plan_outcome: success
    plan_exitcode: "2"
    plan_stdout: |
      Terraform will perform the following actions: ...

Stdout values may still be percent-encoded step outputs; they are
decoded and cleaned on load.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import yaml

from tfreport.comment.render import EnvironmentReport
from tfreport.config import RunSettings
from tfreport.github.context import GitHubContext
from tfreport.pipeline.outputs import clean_stdout, decode_output

_STDOUT_FIELDS = ("validate_stdout", "plan_stdout")


def report_from_dict(
    data: dict,
    settings: RunSettings | None = None,
    context: GitHubContext | None = None,
) -> EnvironmentReport:
    """Build a report, filling gaps from settings and the run context."""
    settings = settings or RunSettings()
    context = context or GitHubContext()

    environment = data.get("environment") or settings.environment
    if not environment:
        raise ValueError("Report has no environment and none is configured")

    values = {}
    for key in (
        "format_outcome", "init_outcome", "validate_outcome", "plan_outcome",
        "validate_stdout", "plan_stdout", "plan_exitcode",
    ):
        value = data.get(key)
        values[key] = "" if value is None else str(value)
    for key in _STDOUT_FIELDS:
        values[key] = clean_stdout(decode_output(values[key]))

    generated_at = data.get("generated_at")
    if isinstance(generated_at, str):
        generated_at = datetime.fromisoformat(generated_at)
    elif generated_at is None:
        # Stamped once here so rendering the report stays repeatable
        generated_at = datetime.now()

    return EnvironmentReport(
        environment=str(environment),
        deploy_on=str(data.get("deploy_on") or settings.deploy_on),
        actor=str(data.get("actor") or context.actor),
        working_directory=str(
            data.get("working_directory") or settings.working_directory
        ),
        sha=str(data.get("sha") or context.sha),
        generated_at=generated_at,
        **values,
    )


def load_report(
    path: Path | str,
    settings: RunSettings | None = None,
    context: GitHubContext | None = None,
) -> EnvironmentReport:
    """Read a report file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file is not a mapping or lacks an environment.
    """
    report_path = Path(path)
    with open(report_path) as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Report at {report_path} is not a YAML mapping")

    return report_from_dict(data, settings, context)
