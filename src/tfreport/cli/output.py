"""Step output CLI commands."""

import argparse
import sys

from tfreport.pipeline.outputs import clean_stdout, decode_output, encode_output


def _read(args: argparse.Namespace) -> str:
    if args.file and args.file != "-":
        with open(args.file) as f:
            return f.read()
    return sys.stdin.read()


def cmd_output_clean(args: argparse.Namespace) -> int:
    print(clean_stdout(_read(args)))
    return 0


def cmd_output_encode(args: argparse.Namespace) -> int:
    text = _read(args)
    if args.clean:
        text = clean_stdout(text)
    print(encode_output(text.rstrip("\n")))
    return 0


def cmd_output_decode(args: argparse.Namespace) -> int:
    print(decode_output(_read(args).rstrip("\n")))
    return 0
