#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import pytest

from conftest import rendered
from wg_defaults import declare_default_from_new, find_default_constructor
from wg_library import FunctionInfo
from wg_version import Version


def test_parameterless_new_gives_default():
    functions = [FunctionInfo("with_label", 1), FunctionInfo("new")]

    assert find_default_constructor(functions) is functions[1]


@pytest.mark.parametrize("func", [
    FunctionInfo("new", hidden=True),
    FunctionInfo("new", need_generate=False),
    FunctionInfo("new", returns_value=False),
    FunctionInfo("new", ret_nullable=True),
    FunctionInfo("new_default"),
])
def test_unusable_new_gives_nothing(env, func):
    assert find_default_constructor([func]) is None
    assert rendered(declare_default_from_new, env, "Button", [func], True) == ""


def test_default_calls_new(env):
    assert rendered(declare_default_from_new, env, "Button", [FunctionInfo("new")], False) == (
        "\n"
        "impl Default for Button {\n"
        "\tfn default() -> Self {\n"
        "\t\tSelf::new()\n"
        "\t}\n"
        "}\n"
    )


def test_default_is_version_guarded(env):
    text = rendered(declare_default_from_new, env, "Button", [FunctionInfo("new", version=Version(3, 24))], False)

    assert text.startswith('\n#[cfg(any(feature = "v3_24", feature = "dox"))]\n')
    assert "impl Default for Button {\n" in text


def test_new_with_parameters_uses_builder(env):
    functions = [FunctionInfo("new", parameter_count=2)]

    assert rendered(declare_default_from_new, env, "Button", functions, True) == (
        "\n"
        "impl Default for Button {\n"
        "\tfn default() -> Self {\n"
        "\t\tglib::object::Object::new::<Self>(&[])\n"
        "\t}\n"
        "}\n"
    )
    assert rendered(declare_default_from_new, env, "Button", functions, False) == ""
