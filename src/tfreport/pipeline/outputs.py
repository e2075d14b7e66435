"""Step output handling.

Step outputs only carry a single line, so multi-line stdout (plan,
validate) is percent-escaped before it is handed between jobs and
unescaped again before rendering.
"""

from __future__ import annotations

# Order matters: '%' is escaped first and unescaped last
_ESCAPES = [("%", "%25"), ("\n", "%0A"), ("\r", "%0D")]

_NOISE = ("Refreshing state...",)


def clean_stdout(text: str) -> str:
    """Drop workflow commands (``::...``) and state-refresh chatter."""
    kept = []
    for line in text.splitlines():
        if line.startswith("::"):
            continue
        if any(noise in line for noise in _NOISE):
            continue
        kept.append(line)
    return "\n".join(kept)


def encode_output(text: str) -> str:
    """Serialize multi-line text into a single-line step output."""
    for raw, escaped in _ESCAPES:
        text = text.replace(raw, escaped)
    return text


def decode_output(text: str) -> str:
    """Inverse of encode_output."""
    for raw, escaped in reversed(_ESCAPES):
        text = text.replace(escaped, raw)
    return text


def summary_block(text: str) -> str:
    """Fence cleaned stdout for the job step summary."""
    return f"```\n{clean_stdout(text)}\n```\n"
