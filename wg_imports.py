#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

"""
Import collection and emission.

Renderers register every path they reference (`glib::translate::*`,
`crate::Object`, ...) together with the scope under which it is needed.
`uses` collapses them into one `use crate::{A,B};` statement per
(crate, scope), in a stable order so regenerated files diff cleanly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from wg_env import Env
from wg_guards import Guard, should_generate, version_condition_no_doc
from wg_internal_error import InternalGeneratorError
from wg_version import Version
from wg_writer import Sink, writeln


@dataclass(frozen=True)
class ImportConditions:
    """
    Scope under which an import is needed.

    constraints are cfg fragments, any of which enables the import;
    they are a set, kept sorted and de-duplicated.
    version is the library version the imported symbol requires.
    """
    constraints: Tuple[str, ...] = ()
    version: Optional[Version] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "constraints", tuple(sorted(set(self.constraints))))

    def is_empty(self) -> bool:
        return not self.constraints and self.version is None

    def sort_key(self) -> tuple:
        return (self.constraints, (0,) if self.version is None else (1, self.version))


@dataclass(frozen=True)
class ImportRequest:
    namespace: str
    symbol: str
    scope: ImportConditions = ImportConditions()

    @staticmethod
    def from_name(name: str, scope: ImportConditions) -> ImportRequest:
        """Split a `crate::path` name; a name without `::` is a caller bug."""
        namespace, sep, symbol = name.partition("::")
        if not sep or not namespace or not symbol:
            raise InternalGeneratorError(f"[ICE-2030] import '{name}' has no namespace qualifier")
        return ImportRequest(namespace, symbol, scope)


@dataclass(frozen=True)
class ImportGroup:
    namespace: str
    scope: Optional[ImportConditions]
    symbols: Tuple[str, ...]


@dataclass
class Imports:
    """
    Map of fully qualified import name -> scope.

    Adding a name twice keeps the weaker of the two scopes: the import must
    be present whenever either requester is compiled.
    """
    map: Dict[str, ImportConditions] = field(default_factory=dict)

    def add(self, name: str, version: Optional[Version] = None, constraints: Sequence[str] = ()) -> None:
        new = ImportConditions(tuple(constraints), version)
        old = self.map.get(name)
        if old is None:
            self.map[name] = new
            return

        if not old.constraints or not new.constraints:
            merged_constraints: Tuple[str, ...] = ()
        else:
            merged_constraints = old.constraints + new.constraints

        if old.version is None or new.version is None:
            merged_version = None
        else:
            merged_version = min(old.version, new.version)

        self.map[name] = ImportConditions(merged_constraints, merged_version)

    def __len__(self) -> int:
        return len(self.map)

    def iter(self) -> Iterator[Tuple[str, ImportConditions]]:
        for name in sorted(self.map):
            yield name, self.map[name]

    def requests(self) -> List[ImportRequest]:
        return [ImportRequest.from_name(name, scope) for name, scope in self.iter()]


def normalize_scope(env: Env, scope: ImportConditions, outer_version: Optional[Version]) -> Optional[ImportConditions]:
    """
    Drop version bounds that the enclosing item or the crate baseline already
    imply. Returns None for the canonical unscoped key.
    """
    version = Version.if_stricter_than(scope.version, outer_version)
    if not should_generate(version, env.min_required_version(None)):
        version = None
    normalized = ImportConditions(scope.constraints, version)
    if normalized.is_empty():
        return None
    return normalized


def _group_sort_key(item: Tuple[Tuple[str, Optional[ImportConditions]], object]) -> tuple:
    (namespace, scope), _ = item
    if scope is None:
        return (namespace, 0)
    return (namespace, 1, scope.sort_key())


def aggregate(
    env: Env,
    requests: Iterable[ImportRequest],
    outer_version: Optional[Version] = None,
) -> List[ImportGroup]:
    grouped: Dict[Tuple[str, Optional[ImportConditions]], set] = {}
    for req in requests:
        key = (req.namespace, normalize_scope(env, req.scope, outer_version))
        grouped.setdefault(key, set()).add(req.symbol)

    return [
        ImportGroup(namespace, scope, tuple(sorted(symbols)))
        for (namespace, scope), symbols in sorted(grouped.items(), key=_group_sort_key)
    ]


def uses(w: Sink, env: Env, imports: Imports, outer_version: Optional[Version] = None) -> None:
    """Write the `use` block for a generated module."""
    writeln(w)
    for group in aggregate(env, imports.requests(), outer_version):
        if group.scope is not None:
            if group.scope.constraints:
                constraints = group.scope.constraints
                writeln(w, Guard(", ".join(constraints)).compile_attr())
                doc_cfg = constraints[0] if len(constraints) == 1 else f"any({', '.join(constraints)})"
                writeln(w, Guard(doc_cfg).doc_attr())
            version_condition_no_doc(w, env, None, group.scope.version, False, 0)
        writeln(w, f"use {group.namespace}::{{{','.join(group.symbols)}}};")
