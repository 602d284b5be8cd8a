#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

"""
Wrapper declarations.

Each foreign type is bound through one `glib::wrapper!` invocation whose shape
says how the wrapped pointer's lifetime is managed:

    Fundamental         ref/unref, possibly inherited from a class ancestor
    ObjectOrInterface   GObject refcounting, parents listed for upcasts
    Boxed               type-specific copy/free (optionally stack-inline)
    AutoBoxed           g_boxed_copy/g_boxed_free keyed by the runtime type id
    Shared              ref/unref declared directly on the type

The variant set is closed: `render` dispatches on it and treats anything else
as an internal error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, NoReturn, Optional, Tuple

from wg_attrs import Derive, Visibility, derives, doc_alias, visibility_marker
from wg_env import Env, use_glib_type
from wg_guards import not_version_condition_no_dox, resolve_env_guard, version_condition
from wg_internal_error import ICELocation, InternalGeneratorError
from wg_library import (
    MAIN, ClassType, InterfaceType, StatusedTypeId, TraitInfo, active_ancestors,
)
from wg_logger import log_debug
from wg_version import Version
from wg_writer import Sink, writeln


@dataclass(frozen=True)
class WrapperInfo:
    """Metadata shared by every wrapper shape."""
    type_name: str
    glib_name: str
    visibility: Visibility = Visibility.PUBLIC
    doc_alias: Optional[str] = None
    derives: Tuple[Derive, ...] = ()


class WrapperKind:
    """
    Base class for wrapper shapes.
    Used only as a common marker; concrete shapes are dataclasses below.
    """
    pass


@dataclass(frozen=True)
class Fundamental(WrapperKind):
    get_type_fn: str
    ref_fn: Optional[str] = None
    unref_fn: Optional[str] = None
    parents: Tuple[StatusedTypeId, ...] = ()


@dataclass(frozen=True)
class ObjectOrInterface(WrapperKind):
    get_type_fn: str
    is_interface: bool = False
    parents: Tuple[StatusedTypeId, ...] = ()
    class_struct: Optional[str] = None


@dataclass(frozen=True)
class Boxed(WrapperKind):
    copy_fn: TraitInfo
    free_fn: str
    boxed_inline: bool = False
    init_function_expression: Optional[str] = None
    copy_into_function_expression: Optional[str] = None
    clear_function_expression: Optional[str] = None
    get_type_fn: Optional[str] = None
    get_type_version: Optional[Version] = None


@dataclass(frozen=True)
class AutoBoxed(WrapperKind):
    get_type_fn: str
    boxed_inline: bool = False
    init_function_expression: Optional[str] = None
    copy_into_function_expression: Optional[str] = None
    clear_function_expression: Optional[str] = None


@dataclass(frozen=True)
class Shared(WrapperKind):
    ref_fn: str
    unref_fn: str
    get_type_fn: Optional[str] = None
    get_type_version: Optional[Version] = None


@dataclass(frozen=True)
class LifetimeFns:
    """Resolved ref/unref pair and the expression passing `ptr` to them."""
    ref_fn: str
    unref_fn: str
    ptr: str
    ffi_crate_name: str


def _ice(env: Env, info: WrapperInfo, message: str) -> NoReturn:
    raise InternalGeneratorError(
        message, ICELocation(namespace=env.library.namespace(MAIN).name, type_name=info.type_name)
    )


def format_parent_name(env: Env, p: StatusedTypeId) -> str:
    if p.type_id.ns_id == MAIN:
        return p.name
    return f"{env.library.namespace(p.type_id.ns_id).crate_name}::{p.name}"


def _write_header(w: Sink, env: Env, info: WrapperInfo) -> None:
    writeln(w, f"{use_glib_type(env, 'wrapper!')} {{")
    if info.doc_alias is not None:
        doc_alias(w, info.doc_alias, False, 1)
    derives(w, info.derives, 1)


def _struct_line(info: WrapperInfo, storage: str, suffix: str = "") -> str:
    return f"{visibility_marker(info.visibility, indent=1)}struct {info.type_name}({storage}){suffix};"


def _inline_group(
    env: Env,
    info: WrapperInfo,
    init: Optional[str],
    copy_into: Optional[str],
    clear: Optional[str],
) -> Optional[Tuple[str, str, str]]:
    present = [e is not None for e in (init, copy_into, clear)]
    if all(present):
        return init, copy_into, clear
    if any(present):
        _ice(env, info, "[ICE-2020] init/copy_into/clear must be given together")
    return None


def _write_inline_group(w: Sink, group: Optional[Tuple[str, str, str]]) -> None:
    if group is None:
        return
    init, copy_into, clear = group
    writeln(w, f"\t\tinit => {init},")
    writeln(w, f"\t\tcopy_into => {copy_into},")
    writeln(w, f"\t\tclear => {clear},")


def _render_straddled(
    w: Sink,
    env: Env,
    get_type_fn: Optional[str],
    get_type_version: Optional[Version],
    render_block: Callable[[Optional[str]], None],
) -> None:
    """
    Render a declaration whose type accessor may be newer than the crate
    baseline: once with the accessor under the version guard, once without it
    under the complement guard.
    """
    if get_type_fn is None:
        render_block(None)
        return
    if resolve_env_guard(env, None, get_type_version) is None:
        render_block(get_type_fn)
        return
    version_condition(w, env, None, get_type_version, False, 0)
    render_block(get_type_fn)
    writeln(w)
    not_version_condition_no_dox(w, env, None, get_type_version, False, 0)
    render_block(None)


# ============================================================================
# Fundamental types
# ============================================================================

def resolve_fundamental_lifetime(env: Env, info: WrapperInfo, kind: Fundamental) -> LifetimeFns:
    """
    Find the ref/unref pair of a fundamental type.

    A pair declared on the type itself wins. Without one, a root type is an
    error; otherwise the first active ancestor that is a class declaring both
    supplies them, and the pointer is cast to that ancestor's C type.
    """
    sys_crate_name = env.main_sys_crate_name()
    if kind.ref_fn is not None and kind.unref_fn is not None:
        return LifetimeFns(kind.ref_fn, kind.unref_fn, "ptr", sys_crate_name)

    parents = active_ancestors(list(kind.parents))
    if not parents:
        _ice(env, info, "[ICE-2010] root fundamental type has no ref/unref functions")

    for p in parents:
        parent_type = env.library.type_(p.type_id)
        if not isinstance(parent_type, ClassType) or not parent_type.has_ref_unref():
            log_debug(env.context, f"{info.type_name}: ancestor '{p.name}' has no ref/unref, skipping")
            continue
        parent_sys_crate_name = env.sys_crate_import(p.type_id)
        log_debug(env.context, f"{info.type_name}: ref/unref inherited from '{p.name}'")
        return LifetimeFns(
            parent_type.ref_fn,
            parent_type.unref_fn,
            f"ptr as *mut {parent_sys_crate_name}::{parent_type.c_type}",
            parent_sys_crate_name,
        )

    _ice(env, info, "[ICE-2011] no ancestor class of fundamental type declares ref/unref")


def define_fundamental_type(w: Sink, env: Env, info: WrapperInfo, kind: Fundamental) -> None:
    sys_crate_name = env.main_sys_crate_name()
    fns = resolve_fundamental_lifetime(env, info, kind)

    _write_header(w, env, info)
    writeln(w, _struct_line(info, f"Shared<{sys_crate_name}::{info.glib_name}>"))
    writeln(w)
    writeln(w, "\tmatch fn {")
    writeln(w, f"\t\tref => |ptr| {fns.ffi_crate_name}::{fns.ref_fn}({fns.ptr}),")
    writeln(w, f"\t\tunref => |ptr| {fns.ffi_crate_name}::{fns.unref_fn}({fns.ptr}),")
    writeln(w, "\t}")
    writeln(w, "}")

    # No `type_` in the wrapper: it would also derive Value traits.
    writeln(w)
    writeln(w)
    writeln(w, f"impl {use_glib_type(env, 'StaticType')} for {info.type_name} {{")
    writeln(w, f"\tfn static_type() -> {use_glib_type(env, 'Type')} {{")
    writeln(w, f"\t\tunsafe {{ from_glib({sys_crate_name}::{kind.get_type_fn}()) }}")
    writeln(w, "\t}")
    writeln(w, "}")


# ============================================================================
# Objects and interfaces
# ============================================================================

def define_object_type(w: Sink, env: Env, info: WrapperInfo, kind: ObjectOrInterface) -> None:
    sys_crate_name = env.main_sys_crate_name()
    class_name = f", {sys_crate_name}::{kind.class_struct}" if kind.class_struct else ""
    kind_name = "Interface" if kind.is_interface else "Object"
    storage = f"{kind_name}<{sys_crate_name}::{info.glib_name}{class_name}>"
    parents = active_ancestors(list(kind.parents))

    _write_header(w, env, info)
    if not parents:
        writeln(w, _struct_line(info, storage))
    elif kind.is_interface:
        prerequisites = [format_parent_name(env, p) for p in parents]
        writeln(w, _struct_line(info, storage, f" @requires {', '.join(prerequisites)}"))
    else:
        interfaces: List[str] = []
        classes: List[str] = []
        for p in parents:
            parent_type = env.library.type_(p.type_id)
            if isinstance(parent_type, InterfaceType):
                interfaces.append(format_parent_name(env, p))
            elif isinstance(parent_type, ClassType):
                classes.append(format_parent_name(env, p))

        parents_string = ""
        if classes:
            parents_string += f" @extends {', '.join(classes)}"
        if interfaces:
            if classes:
                parents_string += ","
            parents_string += f" @implements {', '.join(interfaces)}"
        writeln(w, _struct_line(info, storage, parents_string))

    writeln(w)
    writeln(w, "\tmatch fn {")
    writeln(w, f"\t\ttype_ => || {sys_crate_name}::{kind.get_type_fn}(),")
    writeln(w, "\t}")
    writeln(w, "}")


# ============================================================================
# Boxed types
# ============================================================================

def _boxed_storage(env: Env, info: WrapperInfo, boxed_inline: bool) -> str:
    inline = "Inline" if boxed_inline else ""
    return f"Boxed{inline}<{env.main_sys_crate_name()}::{info.glib_name}>"


def _define_boxed_type_internal(
    w: Sink,
    env: Env,
    info: WrapperInfo,
    kind: Boxed,
    inline_group: Optional[Tuple[str, str, str]],
    get_type_fn: Optional[str],
) -> None:
    sys_crate_name = env.main_sys_crate_name()
    _write_header(w, env, info)
    writeln(w, _struct_line(info, _boxed_storage(env, info, kind.boxed_inline)))
    writeln(w)
    writeln(w, "\tmatch fn {")
    ptr = "mut_override(ptr)" if kind.copy_fn.first_parameter_mut else "ptr"
    writeln(w, f"\t\tcopy => |ptr| {sys_crate_name}::{kind.copy_fn.glib_name}({ptr}),")
    writeln(w, f"\t\tfree => |ptr| {sys_crate_name}::{kind.free_fn}(ptr),")
    _write_inline_group(w, inline_group)
    if get_type_fn is not None:
        writeln(w, f"\t\ttype_ => || {sys_crate_name}::{get_type_fn}(),")
    writeln(w, "\t}")
    writeln(w, "}")


def define_boxed_type(w: Sink, env: Env, info: WrapperInfo, kind: Boxed) -> None:
    inline_group = _inline_group(
        env, info,
        kind.init_function_expression,
        kind.copy_into_function_expression,
        kind.clear_function_expression,
    )
    writeln(w)
    _render_straddled(
        w, env, kind.get_type_fn, kind.get_type_version,
        lambda get_type_fn: _define_boxed_type_internal(w, env, info, kind, inline_group, get_type_fn),
    )


def define_auto_boxed_type(w: Sink, env: Env, info: WrapperInfo, kind: AutoBoxed) -> None:
    sys_crate_name = env.main_sys_crate_name()
    inline_group = _inline_group(
        env, info,
        kind.init_function_expression,
        kind.copy_into_function_expression,
        kind.clear_function_expression,
    )
    boxed_copy = use_glib_type(env, "gobject_ffi::g_boxed_copy")
    boxed_free = use_glib_type(env, "gobject_ffi::g_boxed_free")
    type_id = f"{sys_crate_name}::{kind.get_type_fn}()"

    writeln(w)
    _write_header(w, env, info)
    writeln(w, _struct_line(info, _boxed_storage(env, info, kind.boxed_inline)))
    writeln(w)
    writeln(w, "\tmatch fn {")
    writeln(w, f"\t\tcopy => |ptr| {boxed_copy}({type_id}, ptr as *mut _) as *mut {sys_crate_name}::{info.glib_name},")
    writeln(w, f"\t\tfree => |ptr| {boxed_free}({type_id}, ptr as *mut _),")
    _write_inline_group(w, inline_group)
    writeln(w, f"\t\ttype_ => || {type_id},")
    writeln(w, "\t}")
    writeln(w, "}")


# ============================================================================
# Shared types
# ============================================================================

def _define_shared_type_internal(
    w: Sink,
    env: Env,
    info: WrapperInfo,
    kind: Shared,
    get_type_fn: Optional[str],
) -> None:
    sys_crate_name = env.main_sys_crate_name()
    _write_header(w, env, info)
    writeln(w, _struct_line(info, f"Shared<{sys_crate_name}::{info.glib_name}>"))
    writeln(w)
    writeln(w, "\tmatch fn {")
    writeln(w, f"\t\tref => |ptr| {sys_crate_name}::{kind.ref_fn}(ptr),")
    writeln(w, f"\t\tunref => |ptr| {sys_crate_name}::{kind.unref_fn}(ptr),")
    if get_type_fn is not None:
        writeln(w, f"\t\ttype_ => || {sys_crate_name}::{get_type_fn}(),")
    writeln(w, "\t}")
    writeln(w, "}")


def define_shared_type(w: Sink, env: Env, info: WrapperInfo, kind: Shared) -> None:
    writeln(w)
    _render_straddled(
        w, env, kind.get_type_fn, kind.get_type_version,
        lambda get_type_fn: _define_shared_type_internal(w, env, info, kind, get_type_fn),
    )


def render(w: Sink, env: Env, info: WrapperInfo, kind: WrapperKind) -> None:
    """Write the wrapper declaration for one type."""
    if isinstance(kind, Fundamental):
        define_fundamental_type(w, env, info, kind)
    elif isinstance(kind, ObjectOrInterface):
        define_object_type(w, env, info, kind)
    elif isinstance(kind, Boxed):
        define_boxed_type(w, env, info, kind)
    elif isinstance(kind, AutoBoxed):
        define_auto_boxed_type(w, env, info, kind)
    elif isinstance(kind, Shared):
        define_shared_type(w, env, info, kind)
    else:
        _ice(env, info, f"[ICE-2040] unknown wrapper kind {type(kind).__name__}")
