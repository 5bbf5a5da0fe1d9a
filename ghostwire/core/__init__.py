"""Ghostwire Core - argument synthesis and output parsing."""

from ghostwire.core.arguments import (
    build_arguments,
    effective_headers,
    serialize_headers,
)
from ghostwire.core.output_parser import ParserState, parse_verbose_output

__all__ = [
    "build_arguments",
    "effective_headers",
    "serialize_headers",
    "ParserState",
    "parse_verbose_output",
]
