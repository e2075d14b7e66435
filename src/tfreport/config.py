"""Workflow inputs.

Settings mirror the reusable workflow's inputs and its defaults. They
are read from a YAML file (default: tfreport.yaml in the working
directory), and individual values can be overridden on the command line.

Environment variables:
    TFREPORT_CONFIG — settings file (default: ./tfreport.yaml)
    TFREPORT_MARKER — overall comment marker (default: <!-- @run-terraform -->)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from tfreport.comment import DEFAULT_MARKER

DEFAULT_CONFIG_PATH = Path("tfreport.yaml")

# Environments whose deploys get a binary attestation
ATTEST_ENVIRONMENTS = ("dev", "test")

# Workflow inputs consumed by the provisioning steps, accepted and ignored here
IGNORED_INPUTS = frozenset({
    "workload_identity_provider",
    "service_account",
    "runner",
    "kubernetes_cluster",
    "terraform_workspace",
    "terraform_options",
    "terraform_backend_config",
    "vault_role",
})


@dataclass
class RunSettings:
    environment: str = ""
    working_directory: str = "."
    deploy_on: str = "refs/heads/main"
    image_url: str = ""
    project_id: str = ""
    add_comment_on_pr: bool = True
    destroy: bool = False
    marker: str = DEFAULT_MARKER


def config_path() -> Path:
    """Return the settings file location."""
    return Path(os.environ.get("TFREPORT_CONFIG", str(DEFAULT_CONFIG_PATH)))


def _as_bool(key: str, value) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise ValueError(f"{key}: expected a boolean, got {value!r}")


def settings_from_dict(data: dict) -> RunSettings:
    """Build settings from a mapping.

    Other workflow inputs are skipped; any other unknown key is rejected.
    """
    known = {f.name: f for f in fields(RunSettings)}
    data = {k: v for k, v in data.items() if k not in IGNORED_INPUTS}
    unknown = sorted(set(data) - set(known))
    if unknown:
        raise ValueError(f"Unknown settings: {', '.join(unknown)}")

    values = {}
    for key, value in data.items():
        if value is None:
            continue
        if known[key].type in (bool, "bool"):
            values[key] = _as_bool(key, value)
        else:
            values[key] = str(value)
    return RunSettings(**values)


def load_settings(
    path: Path | str | None = None,
    environ: dict[str, str] | None = None,
) -> RunSettings:
    """Load settings from YAML, falling back to defaults if the file is absent.

    Raises:
        ValueError: If the file is not a mapping or holds unknown keys.
        yaml.YAMLError: If the YAML is malformed.
    """
    env = os.environ if environ is None else environ
    settings_path = Path(path) if path else config_path()

    data = {}
    if settings_path.is_file():
        with open(settings_path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{settings_path} is not a YAML mapping")

    settings = settings_from_dict(data)
    if env.get("TFREPORT_MARKER"):
        settings.marker = env["TFREPORT_MARKER"]
    return settings
