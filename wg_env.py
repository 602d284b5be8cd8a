#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

"""
Read-only environment shared by all renderers during one generation pass.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from wg_config import Config
from wg_context import GenerationContext
from wg_library import MAIN, Library, Namespace, TypeId
from wg_version import Version


@dataclass
class Env:
    library: Library
    config: Config = field(default_factory=Config)
    context: GenerationContext = field(default_factory=GenerationContext.default)

    @property
    def namespaces(self) -> List[Namespace]:
        return self.library.namespaces

    def min_required_version(self, ns_id: Optional[int] = None) -> Optional[Version]:
        """
        Baseline version for a namespace: symbols not newer than it need no guard.

        The main namespace uses the configured minimum; dependencies use their own.
        """
        if ns_id is None or ns_id == MAIN:
            return self.config.min_cfg_version
        return self.library.namespace(ns_id).min_required_version

    def is_too_low_version(self, ns_id: Optional[int], version: Optional[Version]) -> bool:
        """True if `version` is already guaranteed by the namespace baseline."""
        if version is None:
            return False
        baseline = self.min_required_version(ns_id)
        return baseline is not None and version <= baseline

    def crate_prefix(self, ns_id: Optional[int]) -> Optional[str]:
        """Feature prefix for a namespace; None for the main one."""
        if ns_id is None or ns_id == MAIN:
            return None
        return self.library.namespace(ns_id).crate_name

    def main_sys_crate_name(self) -> str:
        return self.library.namespace(MAIN).sys_crate_name

    def sys_crate_import(self, type_id: TypeId) -> str:
        crate_name = self.library.namespace(type_id.ns_id).sys_crate_name
        if crate_name == "gobject_ffi":
            return use_glib_type(self, crate_name)
        return crate_name


def use_glib_type(env: Env, import_name: str) -> str:
    """Path to a glib item, as seen from the crate being generated."""
    krate = "crate" if env.library.is_glib_crate() else "glib"
    return f"{krate}::{import_name}"
