"""Render one environment's Terraform results as a PR comment section."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

NEXT_ACTIONS = {
    "0": "No changes detected. Will not run Terraform apply job",
    "1": "An error occured! Will not run Terraform apply job",
    "2": "Changes detected. Will run Terraform apply job on merge to {deploy_on}",
}
UNKNOWN_ACTION = "Terraform gave an unknown exit code, I don't know what happens next!"

# Same layout as the nb locale: 17.10.2026, 09:52:00
TIMESTAMP_FORMAT = "%d.%m.%Y, %H:%M:%S"


def next_action(plan_exitcode: str, deploy_on: str = "refs/heads/main") -> str:
    """Describe what the pipeline does next for a `terraform plan -detailed-exitcode` result."""
    template = NEXT_ACTIONS.get(str(plan_exitcode).strip())
    if template is None:
        return UNKNOWN_ACTION
    return template.format(deploy_on=deploy_on)


def _details(summary: str, stdout: str) -> str:
    # Captured stdout is not escaped; an embedded ``` closes the fence early
    return "\n".join([
        f"<details><summary>{summary}</summary>",
        "",
        "```",
        stdout.rstrip("\n"),
        "```",
        "",
        "</details>",
    ])


@dataclass
class EnvironmentReport:
    """Outcomes of one pipeline run against a single environment."""
    environment: str
    format_outcome: str = ""
    init_outcome: str = ""
    validate_outcome: str = ""
    validate_stdout: str = ""
    plan_outcome: str = ""
    plan_stdout: str = ""
    plan_exitcode: str = ""
    deploy_on: str = "refs/heads/main"
    actor: str = ""
    working_directory: str = "."
    sha: str = ""
    generated_at: datetime | None = field(default=None, compare=False)

    @property
    def changed(self) -> bool:
        return str(self.plan_exitcode).strip() == "2"

    def heading(self) -> str:
        marker = " – ❗ `CHANGED` ❗" if self.changed else ""
        return f"## Results for {self.environment}{marker}"

    def sections(self) -> dict[str, str]:
        """Named result blocks, in display order."""
        return {
            "format": f"#### Terraform Format and Style 🖌 `{self.format_outcome}`",
            "init": f"#### Terraform Initialization ⚙️ `{self.init_outcome}`",
            "validate": (
                f"#### Terraform Validation 🤖 `{self.validate_outcome}`\n"
                + _details("Validation Output", self.validate_stdout)
            ),
            "plan": (
                f"#### Terraform Plan 📖 `{self.plan_outcome}`\n\n"
                + _details("Show Plan", self.plan_stdout)
            ),
            "next action": (
                "#### Next action 🚀\n"
                + next_action(self.plan_exitcode, self.deploy_on)
            ),
        }

    def footer(self) -> str:
        """Run details line. Only a report without generated_at reads the clock."""
        stamp = (self.generated_at or datetime.now()).strftime(TIMESTAMP_FORMAT)
        return (
            f"*Pusher: @{self.actor}, "
            f"Working Directory: `{self.working_directory}`, "
            f"Commit: {self.sha}, "
            f"Generated at: `{stamp}`*"
        )

    def to_dict(self) -> dict:
        return {
            "environment": self.environment,
            "format_outcome": self.format_outcome,
            "init_outcome": self.init_outcome,
            "validate_outcome": self.validate_outcome,
            "validate_stdout": self.validate_stdout,
            "plan_outcome": self.plan_outcome,
            "plan_stdout": self.plan_stdout,
            "plan_exitcode": self.plan_exitcode,
            "deploy_on": self.deploy_on,
            "actor": self.actor,
            "working_directory": self.working_directory,
            "sha": self.sha,
            "generated_at": self.generated_at.isoformat() if self.generated_at else None,
        }


def render_section(report: EnvironmentReport) -> str:
    """Render the body that goes between an environment's markers."""
    sections = report.sections()
    checks = [
        report.heading(),
        sections["format"],
        sections["init"],
        sections["validate"],
    ]
    rest = [sections["plan"], sections["next action"], report.footer()]
    return "\n".join(checks) + "\n\n" + "\n\n".join(rest)
