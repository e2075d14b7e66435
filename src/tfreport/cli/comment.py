"""PR comment CLI commands."""

import argparse
import sys

import yaml

from tfreport.comment.reconcile import ReconcileError


def _load(args: argparse.Namespace):
    from tfreport.config import load_settings
    from tfreport.github.context import load_context
    from tfreport.report.loader import load_report

    settings = load_settings(args.config)
    if getattr(args, "environment", None):
        settings.environment = args.environment
    context = load_context()
    report = load_report(args.report, settings, context)
    if getattr(args, "environment", None):
        report.environment = args.environment
    return settings, context, report


def cmd_comment_render(args: argparse.Namespace) -> int:
    from tfreport.comment.render import render_section

    try:
        _, _, report = _load(args)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    print(render_section(report))
    return 0


def cmd_comment_post(args: argparse.Namespace) -> int:
    from tfreport.comment.post import post_report
    from tfreport.github.comments import GhCommentStore

    try:
        settings, context, report = _load(args)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    repo = args.repo or context.repository
    thread = args.pr or context.pull_request
    if not repo or not thread:
        print(
            "ERROR: No pull request to comment on. "
            "Pass --repo and --pr outside of a pull_request run.",
            file=sys.stderr,
        )
        return 1

    marker = args.marker or settings.marker
    try:
        result = post_report(
            GhCommentStore(repo), thread, report,
            marker=marker, dry_run=args.dry_run, strict=args.strict,
        )
    except ReconcileError as e:
        print(f"ERROR: {type(e).__name__}: {e}", file=sys.stderr)
        return 1
    except (RuntimeError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    target = result["comment_id"] if result["comment_id"] is not None else "new"
    print(f"  {result['action'].capitalize()} comment {target} on {repo}#{thread} ({report.environment})")
    if result["dry_run"]:
        print("\n[DRY RUN] No comment was written.\n")
        print(result["body"])
    return 0
