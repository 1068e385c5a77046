"""Normalization layer.

Transforms loosely-typed field maps from heterogeneous DNS log sources
into canonical, scored DNSQueryRecord instances.
"""

from tunnelscope.normalizer.query import (
    ALIAS_RULES,
    AliasRule,
    LogNormalizer,
    extract_metadata,
    resolve_aliases,
)

__all__ = [
    "ALIAS_RULES",
    "AliasRule",
    "LogNormalizer",
    "extract_metadata",
    "resolve_aliases",
]
