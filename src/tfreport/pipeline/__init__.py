"""Pipeline helpers — step output handling and job gates."""

from tfreport.pipeline.gates import should_apply, should_attest, should_comment
from tfreport.pipeline.outputs import clean_stdout, decode_output, encode_output

__all__ = [
    "clean_stdout",
    "decode_output",
    "encode_output",
    "should_apply",
    "should_attest",
    "should_comment",
]
