#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

"""
Module-level orchestration: decides the order in which a binding module's
pieces are written (header, imports, one wrapper per type, Default impls).
How each piece looks is left to the renderers.
"""

from wg_config import Config
from wg_defaults import declare_default_from_new
from wg_header import single_version_file, start_comments
from wg_imports import uses
from wg_loader import BindingDescription
from wg_logger import log_stage
from wg_wrappers import AutoBoxed, Boxed, Shared, render
from wg_writer import Sink, SourceBuffer, writeln

# These shapes open with their own blank line.
_SELF_SEPARATED = (Boxed, AutoBoxed, Shared)


def write_module(w: Sink, desc: BindingDescription) -> None:
    env = desc.env
    log_stage(env.context, "Writing header")
    start_comments(w, env.config)

    if len(desc.imports):
        log_stage(env.context, "Rendering imports")
        uses(w, env, desc.imports)

    for spec in desc.wrappers:
        log_stage(env.context, "Rendering wrapper", spec.info.type_name)
        if not isinstance(spec.kind, _SELF_SEPARATED):
            writeln(w)
        render(w, env, spec.info, spec.kind)
        declare_default_from_new(w, env, spec.info.type_name, spec.functions, spec.has_builder)


def generate_module(desc: BindingDescription) -> str:
    buf = SourceBuffer()
    write_module(buf, desc)
    return buf.to_string()


def write_versions_file(w: Sink, conf: Config) -> None:
    """Contents of the single version file referenced by per-file headers."""
    single_version_file(w, conf, "")
