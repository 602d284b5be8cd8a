#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

"""
String escape helper for values placed inside double-quoted literals in
generated attributes (`#[doc(alias = "...")]`, `deprecated = "..."`).
"""


def escape_string(s: str) -> str:
    """
    Prefix every double quote and backslash with a backslash.

    Everything else passes through unchanged.
    """
    parts: list[str] = []
    for ch in s:
        if ch in ('"', "\\"):
            parts.append("\\")
        parts.append(ch)
    return "".join(parts)
