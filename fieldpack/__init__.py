"""Compact binary serialization of typed records described by spec objects."""

__version__ = "0.1.0"
__all__ = [
    "benchmark_data",
    "codec",
    "composite",
    "format_string",
    "primitives",
    "types",
    "varint",
]