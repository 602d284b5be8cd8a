#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

"""
Output sink helpers.

A sink is any object with a `write(str)` method (an open file, io.StringIO,
or SourceBuffer below). Write errors are never caught here.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Protocol


INDENT_STR = "\t"


class Sink(Protocol):
    def write(self, text: str) -> object:
        ...


def tabs(indent: int) -> str:
    return INDENT_STR * indent


def writeln(w: Sink, line: str = "") -> None:
    w.write(line)
    w.write("\n")


def write_vec(w: Sink, items: Iterable[object]) -> None:
    """Write each item on its own line."""
    for item in items:
        writeln(w, str(item))


@dataclass
class SourceBuffer:
    """
    In-memory sink collecting generated text.
    """
    chunks: List[str] = field(default_factory=list)

    def write(self, text: str) -> int:
        self.chunks.append(text)
        return len(text)

    def to_string(self) -> str:
        return "".join(self.chunks)

    def lines(self) -> List[str]:
        return self.to_string().splitlines()
