#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from typing import Optional, Sequence

from wg_env import Env, use_glib_type
from wg_guards import version_condition
from wg_library import FunctionInfo
from wg_writer import Sink, writeln


def find_default_constructor(functions: Sequence[FunctionInfo]) -> Optional[FunctionInfo]:
    """
    The visible, generated `new` whose return is never null.

    A nullable `new` would need `Option<Self>`, which `Default` cannot return.
    """
    for func in functions:
        if (
            not func.hidden
            and func.need_generate
            and func.name == "new"
            and func.returns_value
            and not func.ret_nullable
        ):
            return func
    return None


def declare_default_from_new(
    w: Sink,
    env: Env,
    name: str,
    functions: Sequence[FunctionInfo],
    has_builder: bool,
) -> None:
    func = find_default_constructor(functions)
    if func is None:
        return

    if func.parameter_count == 0:
        writeln(w)
        version_condition(w, env, None, func.version, False, 0)
        writeln(w, f"impl Default for {name} {{")
        writeln(w, "\tfn default() -> Self {")
        writeln(w, "\t\tSelf::new()")
        writeln(w, "\t}")
        writeln(w, "}")
    elif has_builder:
        # `new` needs arguments; fall back to constructing with default properties.
        writeln(w)
        version_condition(w, env, None, func.version, False, 0)
        writeln(w, f"impl Default for {name} {{")
        writeln(w, "\tfn default() -> Self {")
        writeln(w, f"\t\t{use_glib_type(env, 'object::Object')}::new::<Self>(&[])")
        writeln(w, "\t}")
        writeln(w, "}")
