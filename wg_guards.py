#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

"""
Conditional-compilation guards.

A symbol introduced in a library version newer than the baseline its crate
supports must be gated behind that version's cargo feature. Each gate has two
consumers:

    #[cfg(any(feature = "v2_58", feature = "dox"))]          compile guard
    #[cfg_attr(feature = "dox", doc(cfg(feature = "v2_58")))]  documentation twin

The compile guard also admits the documentation feature so docs builds see
every symbol; the twin makes rustdoc label the symbol as version-gated.

When a declaration differs before and after a version boundary, the second
variant goes under the complement guard `#[cfg(not(any(..., feature = "dox")))]`,
so exactly one of the two compiles for any feature set.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from wg_env import Env
from wg_version import Version
from wg_writer import Sink, tabs, writeln

DOCS_FEATURE = "dox"
_DOCS_CFG = f'feature = "{DOCS_FEATURE}"'


def _comment(commented: bool) -> str:
    return "//" if commented else ""


def should_generate(version: Optional[Version], baseline: Optional[Version]) -> bool:
    """A guard is needed iff the symbol has a version strictly newer than the baseline."""
    if version is None:
        return False
    if baseline is None:
        return True
    return version > baseline


@dataclass(frozen=True)
class Guard:
    """A resolved guard predicate, e.g. `feature = "gio_v2_58"`."""
    cfg: str

    def compile_attr(self, commented: bool = False, indent: int = 0) -> str:
        return f"{tabs(indent)}{_comment(commented)}#[cfg(any({self.cfg}, {_DOCS_CFG}))]"

    def doc_attr(self, commented: bool = False, indent: int = 0) -> str:
        return f"{tabs(indent)}{_comment(commented)}#[cfg_attr({_DOCS_CFG}, doc(cfg({self.cfg})))]"

    def complement_attr(self, commented: bool = False, indent: int = 0) -> str:
        return f"{tabs(indent)}{_comment(commented)}#[cfg(not(any({self.cfg}, {_DOCS_CFG})))]"

    def render(self, with_doc: bool = True, commented: bool = False, indent: int = 0) -> str:
        if not with_doc:
            return self.compile_attr(commented, indent)
        return f"{self.compile_attr(commented, indent)}\n{self.doc_attr(commented, indent)}"


def resolve_guard(
    version: Optional[Version],
    baseline: Optional[Version],
    namespace_prefix: Optional[str] = None,
) -> Optional[Guard]:
    if not should_generate(version, baseline):
        return None
    return Guard(version.to_cfg(namespace_prefix))


def resolve_env_guard(env: Env, ns_id: Optional[int], version: Optional[Version]) -> Optional[Guard]:
    """Resolve a guard against the namespace's baseline, prefixing non-main features."""
    return resolve_guard(version, env.min_required_version(ns_id), env.crate_prefix(ns_id))


# ============================================================================
# Raw cfg predicates
# ============================================================================

def cfg_condition_string_no_doc(cfg: Optional[str], commented: bool, indent: int) -> Optional[str]:
    if cfg is None:
        return None
    return Guard(cfg).compile_attr(commented, indent)


def cfg_condition_string_doc(cfg: Optional[str], commented: bool, indent: int) -> Optional[str]:
    if cfg is None:
        return None
    return Guard(cfg).doc_attr(commented, indent)


def cfg_condition_string(cfg: Optional[str], commented: bool, indent: int) -> Optional[str]:
    if cfg is None:
        return None
    return Guard(cfg).render(True, commented, indent)


def cfg_condition(w: Sink, cfg: Optional[str], commented: bool, indent: int) -> None:
    s = cfg_condition_string(cfg, commented, indent)
    if s is not None:
        writeln(w, s)


def cfg_condition_no_doc(w: Sink, cfg: Optional[str], commented: bool, indent: int) -> None:
    s = cfg_condition_string_no_doc(cfg, commented, indent)
    if s is not None:
        writeln(w, s)


def cfg_condition_doc(w: Sink, cfg: Optional[str], commented: bool, indent: int) -> None:
    s = cfg_condition_string_doc(cfg, commented, indent)
    if s is not None:
        writeln(w, s)


# ============================================================================
# Version guards
# ============================================================================

def version_condition_string(
    env: Env,
    ns_id: Optional[int],
    version: Optional[Version],
    commented: bool,
    indent: int,
) -> Optional[str]:
    guard = resolve_env_guard(env, ns_id, version)
    if guard is None:
        return None
    return guard.render(True, commented, indent)


def version_condition(
    w: Sink,
    env: Env,
    ns_id: Optional[int],
    version: Optional[Version],
    commented: bool,
    indent: int,
) -> None:
    s = version_condition_string(env, ns_id, version, commented, indent)
    if s is not None:
        writeln(w, s)


def version_condition_no_doc(
    w: Sink,
    env: Env,
    ns_id: Optional[int],
    version: Optional[Version],
    commented: bool,
    indent: int,
) -> None:
    guard = resolve_env_guard(env, ns_id, version)
    if guard is not None:
        writeln(w, guard.render(False, commented, indent))


def version_condition_doc(
    w: Sink,
    env: Env,
    version: Optional[Version],
    commented: bool,
    indent: int,
) -> None:
    """Documentation twin only, always against the main crate's baseline."""
    guard = resolve_guard(version, env.config.min_cfg_version)
    if guard is not None:
        writeln(w, guard.doc_attr(commented, indent))


def not_version_condition(
    w: Sink,
    version: Optional[Version],
    commented: bool,
    indent: int,
) -> None:
    if version is None:
        return
    s = cfg_condition_string(f"not({version.to_cfg()})", commented, indent)
    writeln(w, s)


def not_version_condition_no_dox(
    w: Sink,
    env: Env,
    ns_id: Optional[int],
    version: Optional[Version],
    commented: bool,
    indent: int,
) -> None:
    """Complement of `version_condition`: active only when neither the version nor docs are enabled."""
    if version is None:
        return
    guard = Guard(version.to_cfg(env.crate_prefix(ns_id)))
    writeln(w, guard.complement_attr(commented, indent))
