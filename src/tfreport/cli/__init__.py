"""Unified CLI for Terraform pipeline reporting.

Usage:
    tfreport comment render <report> [--environment X]
    tfreport comment post <report> [--repo owner/name] [--pr N] [--marker M] [--strict] [--dry-run]
    tfreport output clean [file]
    tfreport output encode [file] [--clean]
    tfreport output decode [file]
    tfreport gate comment [--event X]
    tfreport gate apply --exitcode N [--ref X] [--event X]
    tfreport gate attest [--environment X] [--applied] [--digest D] [--attestations FILE]
"""

import argparse
import sys

from tfreport.cli.comment import cmd_comment_post, cmd_comment_render
from tfreport.cli.gate import cmd_gate_apply, cmd_gate_attest, cmd_gate_comment
from tfreport.cli.output import cmd_output_clean, cmd_output_decode, cmd_output_encode


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tfreport",
        description="Pull request reporting and job gates for Terraform pipelines",
    )
    parser.add_argument(
        "--config", default=None,
        help="Path to tfreport.yaml (default: $TFREPORT_CONFIG or ./tfreport.yaml)",
    )
    sub = parser.add_subparsers(dest="command")

    # comment
    com = sub.add_parser("comment", help="Pull request comment operations")
    com_sub = com.add_subparsers(dest="subcommand")

    render = com_sub.add_parser(
        "render", help="Print the rendered section for a report",
    )
    render.add_argument("report", help="Path to report YAML/JSON")
    render.add_argument(
        "--environment", default=None,
        help="Override the report's environment",
    )

    post = com_sub.add_parser(
        "post", help="Create or update the aggregate PR comment",
    )
    post.add_argument("report", help="Path to report YAML/JSON")
    post.add_argument(
        "--environment", default=None,
        help="Override the report's environment",
    )
    post.add_argument(
        "--repo", default=None,
        help="owner/name (default: $GITHUB_REPOSITORY)",
    )
    post.add_argument(
        "--pr", type=int, default=None,
        help="Pull request number (default: from the event payload)",
    )
    post.add_argument(
        "--marker", default=None,
        help="Overall comment marker",
    )
    post.add_argument(
        "--strict", action="store_true",
        help="Fail if more than one comment carries the marker",
    )
    post.add_argument(
        "--dry-run", action="store_true",
        help="Print the resulting body without writing",
    )

    # output
    out = sub.add_parser("output", help="Step output handling")
    out_sub = out.add_subparsers(dest="subcommand")

    clean = out_sub.add_parser(
        "clean", help="Strip workflow commands and refresh noise",
    )
    clean.add_argument("file", nargs="?", default="-")

    enc = out_sub.add_parser(
        "encode", help="Escape multi-line text into one output line",
    )
    enc.add_argument("file", nargs="?", default="-")
    enc.add_argument(
        "--clean", action="store_true",
        help="Clean the text before encoding",
    )

    dec = out_sub.add_parser("decode", help="Reverse of encode")
    dec.add_argument("file", nargs="?", default="-")

    # gate
    gate = sub.add_parser("gate", help="Job gating decisions")
    gate_sub = gate.add_subparsers(dest="subcommand")

    g_com = gate_sub.add_parser("comment", help="Should the PR comment job run")
    g_com.add_argument(
        "--event", default=None,
        help="Event name (default: $GITHUB_EVENT_NAME)",
    )

    g_app = gate_sub.add_parser("apply", help="Should apply/destroy run")
    g_app.add_argument(
        "--exitcode", required=True,
        help="terraform plan -detailed-exitcode result",
    )
    g_app.add_argument(
        "--ref", default=None,
        help="Git ref (default: $GITHUB_REF)",
    )
    g_app.add_argument(
        "--event", default=None,
        help="Event name (default: $GITHUB_EVENT_NAME)",
    )

    g_att = gate_sub.add_parser("attest", help="Should the image be attested")
    g_att.add_argument(
        "--environment", default=None,
        help="Override the configured environment",
    )
    g_att.add_argument(
        "--applied", action="store_true",
        help="The apply job completed",
    )
    g_att.add_argument(
        "--digest", default=None,
        help="Image digest, required when image_url is a tag URL",
    )
    g_att.add_argument(
        "--attestations", default=None,
        help="File holding the existing attestation listing (empty means sign)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    dispatch = {
        ("comment", "render"): cmd_comment_render,
        ("comment", "post"): cmd_comment_post,
        ("output", "clean"): cmd_output_clean,
        ("output", "encode"): cmd_output_encode,
        ("output", "decode"): cmd_output_decode,
        ("gate", "comment"): cmd_gate_comment,
        ("gate", "apply"): cmd_gate_apply,
        ("gate", "attest"): cmd_gate_attest,
    }

    subcommand: str | None = getattr(args, "subcommand", None)
    handler = dispatch.get((args.command, subcommand or ""))
    if handler:
        return handler(args)

    parser.parse_args([args.command, "--help"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
