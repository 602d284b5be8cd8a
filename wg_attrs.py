#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

"""
Single-purpose attribute renderers.

Every helper takes `commented` (prefix the attribute with `//` so it stays in
the text but is inert) and `indent` (number of tabs).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from wg_env import Env
from wg_library import TypeId
from wg_string_escape import escape_string
from wg_version import Version
from wg_writer import Sink, tabs, writeln


def _comment(commented: bool) -> str:
    return "//" if commented else ""


class Visibility(Enum):
    PUBLIC = "pub"
    CRATE = "pub(crate)"
    SUPER = "pub(super)"
    PRIVATE = ""

    def __str__(self) -> str:
        return self.value

    @staticmethod
    def parse(text: str) -> Visibility:
        for vis in Visibility:
            if vis.value == text or vis.name.lower() == text.lower():
                return vis
        raise ValueError(f"unknown visibility '{text}'")


@dataclass(frozen=True)
class Derive:
    """One `#[derive(...)]` attribute, optionally under `cfg_attr`."""
    names: Tuple[str, ...]
    cfg_condition: Optional[str] = None


def visibility_marker(visibility: Visibility, commented: bool = False, indent: int = 0) -> str:
    """Leading visibility for an item, with its trailing space ("" when private)."""
    prefix = f"{visibility.value} " if visibility.value else ""
    return f"{tabs(indent)}{_comment(commented)}{prefix}"


def cfg_deprecated_string(
    env: Env,
    type_tid: Optional[TypeId],
    deprecated: Optional[Version],
    commented: bool,
    indent: int,
) -> Optional[str]:
    if deprecated is None:
        return None
    comment = _comment(commented)
    ns_id = type_tid.ns_id if type_tid is not None else None
    if env.is_too_low_version(ns_id, deprecated):
        return f'{tabs(indent)}{comment}#[deprecated = "Since {deprecated}"]'
    return f'{tabs(indent)}{comment}#[cfg_attr({deprecated.to_cfg()}, deprecated = "Since {deprecated}")]'


def cfg_deprecated(
    w: Sink,
    env: Env,
    type_tid: Optional[TypeId],
    deprecated: Optional[Version],
    commented: bool,
    indent: int,
) -> None:
    s = cfg_deprecated_string(env, type_tid, deprecated, commented, indent)
    if s is not None:
        writeln(w, s)


def derives(w: Sink, derive_list: Sequence[Derive], indent: int, commented: bool = False) -> None:
    for derive in derive_list:
        names = ", ".join(derive.names)
        if derive.cfg_condition is not None:
            s = f"#[cfg_attr({derive.cfg_condition}, derive({names}))]"
        else:
            s = f"#[derive({names})]"
        writeln(w, f"{tabs(indent)}{_comment(commented)}{s}")


def doc_alias(w: Sink, name: str, commented: bool, indent: int) -> None:
    writeln(w, f'{tabs(indent)}{_comment(commented)}#[doc(alias = "{escape_string(name)}")]')


def doc_hidden(w: Sink, hidden: bool, commented: bool, indent: int) -> None:
    if hidden:
        writeln(w, f"{tabs(indent)}{_comment(commented)}#[doc(hidden)]")


def allow_deprecated(w: Sink, allow: Optional[Version], commented: bool, indent: int) -> None:
    """Emitted for items that use deprecated API, whether or not they are deprecated themselves."""
    if allow is not None:
        writeln(w, f"{tabs(indent)}{_comment(commented)}#[allow(deprecated)]")
