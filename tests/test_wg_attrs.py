#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import pytest

from conftest import GIO, rendered, type_id
from wg_attrs import (
    Derive,
    Visibility,
    allow_deprecated,
    cfg_deprecated,
    cfg_deprecated_string,
    derives,
    doc_alias,
    doc_hidden,
    visibility_marker,
)
from wg_version import Version


def test_visibility_parse_accepts_keyword_or_name():
    assert Visibility.parse("pub") is Visibility.PUBLIC
    assert Visibility.parse("pub(crate)") is Visibility.CRATE
    assert Visibility.parse("Super") is Visibility.SUPER
    assert Visibility.parse("private") is Visibility.PRIVATE
    assert Visibility.parse("") is Visibility.PRIVATE


def test_visibility_parse_rejects_unknown():
    with pytest.raises(ValueError):
        Visibility.parse("pub(in crate::x)")


def test_visibility_marker():
    assert visibility_marker(Visibility.PUBLIC) == "pub "
    assert visibility_marker(Visibility.CRATE, indent=1) == "\tpub(crate) "
    assert visibility_marker(Visibility.PRIVATE, commented=True) == "//"


def test_deprecated_at_or_below_baseline_is_unconditional(env):
    assert cfg_deprecated_string(env, None, Version(3, 20), False, 0) == '#[deprecated = "Since 3.20"]'
    assert cfg_deprecated_string(env, None, Version(3, 22), False, 1) == '\t#[deprecated = "Since 3.22"]'


def test_deprecated_above_baseline_is_feature_gated(env):
    assert cfg_deprecated_string(env, None, Version(3, 24), True, 0) == (
        '//#[cfg_attr(feature = "v3_24", deprecated = "Since 3.24")]'
    )


def test_deprecated_uses_the_owning_namespace_baseline(library, env):
    tid = type_id(library, GIO, "File")

    assert rendered(cfg_deprecated, env, tid, Version(2, 56), False, 0) == '#[deprecated = "Since 2.56"]\n'
    assert rendered(cfg_deprecated, env, None, None, False, 0) == ""


def test_derives_plain_and_conditional():
    derive_list = [Derive(("Debug", "Clone")), Derive(("Hash",), 'feature = "v3_24"')]

    assert rendered(derives, derive_list, 1) == (
        "\t#[derive(Debug, Clone)]\n"
        '\t#[cfg_attr(feature = "v3_24", derive(Hash))]\n'
    )
    assert rendered(derives, [Derive(("Debug",))], 0, commented=True) == "//#[derive(Debug)]\n"


def test_doc_alias_escapes_quotes():
    assert rendered(doc_alias, 'say "hi"', False, 0) == '#[doc(alias = "say \\"hi\\"")]\n'


def test_doc_hidden_and_allow_deprecated():
    assert rendered(doc_hidden, True, False, 1) == "\t#[doc(hidden)]\n"
    assert rendered(doc_hidden, False, False, 1) == ""
    assert rendered(allow_deprecated, Version(3, 0), True, 0) == "//#[allow(deprecated)]\n"
    assert rendered(allow_deprecated, None, False, 0) == ""
