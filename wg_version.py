#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

"""
Library version numbers as they appear in foreign library descriptions.

A version doubles as a cargo feature name: `2.58` is gated by the
`v2_58` feature, `2.58.1` by `v2_58_1`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, order=True)
class Version:
    major: int
    minor: int = 0
    patch: int = 0

    @staticmethod
    def parse(text: str) -> Version:
        """
        Parse `major[.minor[.patch]]`.

        Raises ValueError on anything else.
        """
        parts = text.strip().split(".")
        if not 1 <= len(parts) <= 3 or not all(p.isdigit() for p in parts):
            raise ValueError(f"invalid version '{text}'")
        numbers = [int(p) for p in parts] + [0] * (3 - len(parts))
        return Version(numbers[0], numbers[1], numbers[2])

    def __str__(self) -> str:
        if self.patch == 0:
            return f"{self.major}.{self.minor}"
        return f"{self.major}.{self.minor}.{self.patch}"

    def to_feature(self) -> str:
        if self.patch == 0:
            return f"v{self.major}_{self.minor}"
        return f"v{self.major}_{self.minor}_{self.patch}"

    def to_cfg(self, namespace_prefix: Optional[str] = None) -> str:
        """Render the cfg predicate enabling this version, e.g. `feature = "gio_v2_58"`."""
        if namespace_prefix:
            return f'feature = "{namespace_prefix}_{self.to_feature()}"'
        return f'feature = "{self.to_feature()}"'

    @staticmethod
    def if_stricter_than(inner: Optional[Version], outer: Optional[Version]) -> Optional[Version]:
        """
        Returns `inner` if it says more than `outer` already does.

        An absent outer bound constrains nothing, so any inner bound is kept.
        """
        if inner is None:
            return None
        if outer is None or inner > outer:
            return inner
        return None


def format_version(version: Optional[Version]) -> str:
    return "<none>" if version is None else str(version)
