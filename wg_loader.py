#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

"""
Load a binding description (JSON) into the emitter's data model.

The description is produced by the analysis stage and is assumed valid;
this loader only rejects shapes it cannot map (missing keys, unknown kinds,
dangling ancestor references).

Layout:

    {
      "config":     {"min_cfg_version": "2.56", "girs_version": [...], ...},
      "namespaces": [{"name": "Gtk", "crate_name": "gtk", "sys_crate_name": "ffi", ...}, ...],
      "types":      [{"namespace": "Gtk", "kind": "class", "name": "Widget", "c_type": "GtkWidget", ...}, ...],
      "imports":    [{"name": "glib::translate::*", "version": "2.58", "constraints": [...]}, ...],
      "wrappers":   [{"kind": "object", "type_name": "Button", "glib_name": "GtkButton", ...}, ...]
    }

The first namespace is the one bindings are generated for.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from wg_attrs import Derive, Visibility
from wg_config import Config, GirVersionInfo
from wg_context import GenerationContext
from wg_env import Env
from wg_imports import Imports
from wg_library import (
    AncestorStatus, ClassType, FunctionInfo, InterfaceType, LibType, Library, Namespace,
    RecordType, StatusedTypeId, TraitInfo,
)
from wg_logger import log_debug
from wg_version import Version
from wg_wrappers import (
    AutoBoxed, Boxed, Fundamental, ObjectOrInterface, Shared, WrapperInfo, WrapperKind,
)


class DescriptionError(ValueError):
    """Raised when a binding description cannot be mapped to the data model."""

    def __init__(self, code: str, details: str):
        super().__init__(f"[{code}] {details}")
        self.code = code
        self.details = details


@dataclass(frozen=True)
class WrapperSpec:
    info: WrapperInfo
    kind: WrapperKind
    functions: Tuple[FunctionInfo, ...] = ()
    has_builder: bool = False


@dataclass
class BindingDescription:
    env: Env
    imports: Imports = field(default_factory=Imports)
    wrappers: List[WrapperSpec] = field(default_factory=list)


def _require(d: Dict[str, Any], key: str, where: str) -> Any:
    if key not in d:
        raise DescriptionError("DSC-0010", f"{where}: missing key '{key}'")
    return d[key]


def _version(value: Optional[str], where: str) -> Optional[Version]:
    if value is None:
        return None
    try:
        return Version.parse(str(value))
    except ValueError as e:
        raise DescriptionError("DSC-0020", f"{where}: {e}") from e


def _parse_config(d: Dict[str, Any]) -> Config:
    conf = Config(
        girs_version=[
            GirVersionInfo(
                gir_dir=_require(g, "gir_dir", "config.girs_version"),
                repository_url=g.get("repository_url"),
                hash=g.get("hash"),
            )
            for g in d.get("girs_version", [])
        ],
        single_version_file=d.get("single_version_file"),
    )
    min_cfg = _version(d.get("min_cfg_version"), "config.min_cfg_version")
    if min_cfg is not None:
        conf.min_cfg_version = min_cfg
    return conf


class _Loader:
    def __init__(self, data: Dict[str, Any], context: GenerationContext):
        self.data = data
        self.context = context
        self.library = Library()
        self.ns_ids: Dict[str, int] = {}

    def load(self) -> BindingDescription:
        env = Env(self.library, _parse_config(self.data.get("config", {})), self.context)

        namespaces = _require(self.data, "namespaces", "description")
        if not namespaces:
            raise DescriptionError("DSC-0011", "description: at least the main namespace is required")
        for ns in namespaces:
            self._load_namespace(ns)
        for ty in self.data.get("types", []):
            self._load_type(ty)

        desc = BindingDescription(env)
        for imp in self.data.get("imports", []):
            desc.imports.add(
                _require(imp, "name", "imports"),
                _version(imp.get("version"), "imports.version"),
                tuple(imp.get("constraints", ())),
            )
        for wrapper in self.data.get("wrappers", []):
            desc.wrappers.append(self._load_wrapper(wrapper))
        log_debug(self.context, f"Loaded {len(self.library.types)} types, {len(desc.wrappers)} wrappers")
        return desc

    def _ns_id(self, name: str, where: str) -> int:
        if name not in self.ns_ids:
            raise DescriptionError("DSC-0030", f"{where}: unknown namespace '{name}'")
        return self.ns_ids[name]

    def _load_namespace(self, d: Dict[str, Any]) -> None:
        name = _require(d, "name", "namespaces")
        ns = Namespace(
            name=name,
            crate_name=d.get("crate_name", name.lower()),
            sys_crate_name=d.get("sys_crate_name", "ffi" if not self.ns_ids else f"{name.lower()}::ffi"),
            min_required_version=_version(d.get("min_required_version"), f"namespace {name}"),
        )
        self.ns_ids[name] = self.library.add_namespace(ns)

    def _load_type(self, d: Dict[str, Any]) -> None:
        where = f"type {d.get('name', '?')}"
        ns_id = self._ns_id(_require(d, "namespace", where), where)
        kind = _require(d, "kind", where)
        name = _require(d, "name", where)
        c_type = _require(d, "c_type", where)
        ty: LibType
        if kind == "class":
            ty = ClassType(name, c_type, d.get("glib_get_type"), d.get("ref_fn"), d.get("unref_fn"))
        elif kind == "interface":
            ty = InterfaceType(name, c_type, d.get("glib_get_type"))
        elif kind == "record":
            ty = RecordType(name, c_type, d.get("glib_get_type"))
        else:
            raise DescriptionError("DSC-0040", f"{where}: unknown type kind '{kind}'")
        self.library.add_type(ns_id, ty)

    def _load_parents(self, entries: List[Dict[str, Any]], where: str) -> Tuple[StatusedTypeId, ...]:
        parents = []
        for p in entries:
            ns_id = self._ns_id(_require(p, "namespace", where), where)
            name = _require(p, "name", where)
            tid = self.library.find_type(ns_id, name)
            if tid is None:
                raise DescriptionError("DSC-0050", f"{where}: unknown ancestor '{p['namespace']}.{name}'")
            status_name = p.get("status", "active").upper()
            try:
                status = AncestorStatus[status_name]
            except KeyError:
                raise DescriptionError("DSC-0060", f"{where}: unknown ancestor status '{status_name.lower()}'") from None
            parents.append(StatusedTypeId(tid, name, status))
        return tuple(parents)

    def _load_wrapper(self, d: Dict[str, Any]) -> WrapperSpec:
        type_name = _require(d, "type_name", "wrappers")
        where = f"wrapper {type_name}"
        try:
            visibility = Visibility.parse(d.get("visibility", "pub"))
        except ValueError as e:
            raise DescriptionError("DSC-0070", f"{where}: {e}") from e

        info = WrapperInfo(
            type_name=type_name,
            glib_name=_require(d, "glib_name", where),
            visibility=visibility,
            doc_alias=d.get("doc_alias"),
            derives=tuple(
                Derive(tuple(_require(der, "names", where)), der.get("cfg_condition"))
                for der in d.get("derives", [])
            ),
        )
        functions = tuple(
            FunctionInfo(
                name=_require(f, "name", where),
                parameter_count=f.get("parameter_count", 0),
                hidden=f.get("hidden", False),
                need_generate=f.get("need_generate", True),
                returns_value=f.get("returns_value", True),
                ret_nullable=f.get("ret_nullable", False),
                version=_version(f.get("version"), where),
            )
            for f in d.get("functions", [])
        )
        return WrapperSpec(info, self._load_kind(d, where), functions, d.get("has_builder", False))

    def _load_kind(self, d: Dict[str, Any], where: str) -> WrapperKind:
        kind = _require(d, "kind", where)
        if kind == "fundamental":
            return Fundamental(
                get_type_fn=_require(d, "get_type_fn", where),
                ref_fn=d.get("ref_fn"),
                unref_fn=d.get("unref_fn"),
                parents=self._load_parents(d.get("parents", []), where),
            )
        if kind in ("object", "interface"):
            return ObjectOrInterface(
                get_type_fn=_require(d, "get_type_fn", where),
                is_interface=kind == "interface",
                parents=self._load_parents(d.get("parents", []), where),
                class_struct=d.get("class_struct"),
            )
        if kind == "boxed":
            copy_fn = _require(d, "copy_fn", where)
            if isinstance(copy_fn, str):
                copy_fn = {"name": copy_fn}
            return Boxed(
                copy_fn=TraitInfo(
                    glib_name=_require(copy_fn, "name", where),
                    version=_version(copy_fn.get("version"), where),
                    first_parameter_mut=copy_fn.get("first_parameter_mut", False),
                ),
                free_fn=_require(d, "free_fn", where),
                boxed_inline=d.get("boxed_inline", False),
                init_function_expression=d.get("init_function_expression"),
                copy_into_function_expression=d.get("copy_into_function_expression"),
                clear_function_expression=d.get("clear_function_expression"),
                get_type_fn=d.get("get_type_fn"),
                get_type_version=_version(d.get("get_type_version"), where),
            )
        if kind == "auto_boxed":
            return AutoBoxed(
                get_type_fn=_require(d, "get_type_fn", where),
                boxed_inline=d.get("boxed_inline", False),
                init_function_expression=d.get("init_function_expression"),
                copy_into_function_expression=d.get("copy_into_function_expression"),
                clear_function_expression=d.get("clear_function_expression"),
            )
        if kind == "shared":
            return Shared(
                ref_fn=_require(d, "ref_fn", where),
                unref_fn=_require(d, "unref_fn", where),
                get_type_fn=d.get("get_type_fn"),
                get_type_version=_version(d.get("get_type_version"), where),
            )
        raise DescriptionError("DSC-0080", f"{where}: unknown wrapper kind '{kind}'")


def parse_description(data: Dict[str, Any], context: Optional[GenerationContext] = None) -> BindingDescription:
    return _Loader(data, context or GenerationContext.default()).load()


def load_description(path: Path, context: Optional[GenerationContext] = None) -> BindingDescription:
    """Read and map a JSON description. OSError propagates to the caller."""
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DescriptionError("DSC-0001", f"{path}: invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise DescriptionError("DSC-0002", f"{path}: top level must be an object")
    return parse_description(data, context)
