#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

"""
Foreign library model consumed by the emitter.

Types live in one table owned by the Library and are referred to by TypeId
(namespace index + slot), so ancestor chains are plain lists of ids rather
than nested objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Optional

from wg_internal_error import ICELocation, InternalGeneratorError
from wg_version import Version

# Index of the namespace bindings are being generated for.
MAIN = 0


@dataclass(frozen=True, order=True)
class TypeId:
    ns_id: int
    id: int


class AncestorStatus(Enum):
    ACTIVE = auto()
    IGNORED = auto()
    UNSPECIFIED = auto()

    def is_active(self) -> bool:
        return self is AncestorStatus.ACTIVE


@dataclass(frozen=True)
class StatusedTypeId:
    """An ancestor entry: a type reference plus whether it is wanted in the bindings."""
    type_id: TypeId
    name: str
    status: AncestorStatus = AncestorStatus.ACTIVE


def active_ancestors(parents: List[StatusedTypeId]) -> List[StatusedTypeId]:
    return [p for p in parents if p.status.is_active()]


class LibType:
    """
    Base class for foreign library types.
    Used only as a common marker; concrete kinds are dataclasses below.
    """
    pass


@dataclass(frozen=True)
class ClassType(LibType):
    name: str
    c_type: str
    glib_get_type: Optional[str] = None
    ref_fn: Optional[str] = None
    unref_fn: Optional[str] = None

    def has_ref_unref(self) -> bool:
        return self.ref_fn is not None and self.unref_fn is not None


@dataclass(frozen=True)
class InterfaceType(LibType):
    name: str
    c_type: str
    glib_get_type: Optional[str] = None


@dataclass(frozen=True)
class RecordType(LibType):
    name: str
    c_type: str
    glib_get_type: Optional[str] = None


@dataclass(frozen=True)
class Namespace:
    """
    A foreign namespace and the crates that bind it.

    min_required_version is the oldest library version the bindings for this
    namespace support; symbols at or below it need no version guard.
    """
    name: str
    crate_name: str
    sys_crate_name: str
    min_required_version: Optional[Version] = None


@dataclass(frozen=True)
class TraitInfo:
    """A foreign function implementing a wrapper trait (copy, ref, ...)."""
    glib_name: str
    version: Optional[Version] = None
    first_parameter_mut: bool = False


@dataclass(frozen=True)
class FunctionInfo:
    """The subset of analyzed function metadata needed for Default synthesis."""
    name: str
    parameter_count: int = 0
    hidden: bool = False
    need_generate: bool = True
    returns_value: bool = True
    ret_nullable: bool = False
    version: Optional[Version] = None


@dataclass
class Library:
    namespaces: List[Namespace] = field(default_factory=list)
    types: Dict[TypeId, LibType] = field(default_factory=dict)

    def add_namespace(self, namespace: Namespace) -> int:
        self.namespaces.append(namespace)
        return len(self.namespaces) - 1

    def add_type(self, ns_id: int, ty: LibType) -> TypeId:
        slot = sum(1 for tid in self.types if tid.ns_id == ns_id)
        tid = TypeId(ns_id, slot)
        self.types[tid] = ty
        return tid

    def namespace(self, ns_id: int) -> Namespace:
        if not 0 <= ns_id < len(self.namespaces):
            raise InternalGeneratorError(f"[ICE-2001] unknown namespace id {ns_id}")
        return self.namespaces[ns_id]

    def type_(self, tid: TypeId) -> LibType:
        ty = self.types.get(tid)
        if ty is None:
            ns_name = self.namespaces[tid.ns_id].name if 0 <= tid.ns_id < len(self.namespaces) else None
            raise InternalGeneratorError(
                f"[ICE-2002] type id {tid.ns_id}:{tid.id} is not in the type table",
                ICELocation(namespace=ns_name, type_name=None),
            )
        return ty

    def find_type(self, ns_id: int, name: str) -> Optional[TypeId]:
        for tid, ty in self.types.items():
            if tid.ns_id == ns_id and getattr(ty, "name", None) == name:
                return tid
        return None

    def is_glib_crate(self) -> bool:
        return bool(self.namespaces) and self.namespaces[MAIN].name == "GLib"
