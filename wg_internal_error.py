#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ICELocation:
    namespace: Optional[str]
    type_name: Optional[str]


class InternalGeneratorError(RuntimeError):
    """
    ICE = generator bug / inconsistent upstream metadata.
    Never recovered from: guessing lifetime semantics would produce unsound bindings.
    """

    def __init__(self, message: str, loc: ICELocation | None = None):
        super().__init__(message)
        self.message = message
        self.loc = loc

    def format(self) -> str:
        message = self.message
        if "[ICE-" not in message:
            message = f"[ICE-9999] {message}"
        if self.loc and self.loc.type_name:
            if self.loc.namespace:
                return f"{self.loc.namespace}.{self.loc.type_name}: internal generator error: {message}"
            return f"{self.loc.type_name}: internal generator error: {message}"
        return f"internal generator error: {message}"
