"""Job gate CLI commands.

Each command prints ``key=value`` lines that can be appended to
$GITHUB_OUTPUT.
"""

import argparse
import sys

import yaml

from tfreport.config import RunSettings, load_settings
from tfreport.github.context import GitHubContext, load_context
from tfreport.pipeline import attest, gates


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _load(args: argparse.Namespace) -> tuple[RunSettings, GitHubContext] | None:
    try:
        return load_settings(args.config), load_context()
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return None


def cmd_gate_comment(args: argparse.Namespace) -> int:
    loaded = _load(args)
    if loaded is None:
        return 1
    settings, context = loaded
    event = args.event or context.event_name
    print(f"run={_flag(gates.should_comment(settings, event))}")
    return 0


def cmd_gate_apply(args: argparse.Namespace) -> int:
    loaded = _load(args)
    if loaded is None:
        return 1
    settings, context = loaded
    run = gates.should_apply(
        settings,
        ref=args.ref or context.ref,
        event_name=args.event or context.event_name,
        plan_exitcode=args.exitcode,
    )
    print(f"run={_flag(run)}")
    print(f"mode={gates.apply_mode(settings)}")
    if settings.environment:
        print(f"plan_file={gates.plan_file_name(settings.environment)}")
    return 0


def cmd_gate_attest(args: argparse.Namespace) -> int:
    loaded = _load(args)
    if loaded is None:
        return 1
    settings, _ = loaded
    if args.environment:
        settings.environment = args.environment

    run = gates.should_attest(settings, applied=args.applied)
    print(f"run={_flag(run)}")
    if not run:
        return 0

    existing = ""
    try:
        if args.attestations:
            with open(args.attestations) as f:
                existing = f.read()
        image_url = attest.image_digest_url(settings.image_url, args.digest)
    except (OSError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    env = settings.environment
    print(f"image_url={image_url}")
    print(f"attestor={attest.attestor_name(env)}")
    if settings.project_id:
        print(f"attestor_path={attest.attestor_path(settings.project_id, env)}")
    print(f"key={attest.key_name(env)}")
    print(f"sign={_flag(attest.should_sign(existing))}")
    return 0
