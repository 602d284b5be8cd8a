#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import itertools

import pytest

from conftest import GIO, GOBJECT, rendered
from wg_cfg_expr import cfg_attr_predicate, is_active
from wg_guards import (
    Guard,
    cfg_condition,
    cfg_condition_doc,
    cfg_condition_no_doc,
    cfg_condition_string,
    not_version_condition,
    not_version_condition_no_dox,
    resolve_env_guard,
    resolve_guard,
    should_generate,
    version_condition,
    version_condition_doc,
    version_condition_no_doc,
    version_condition_string,
)
from wg_version import Version

V3_24_GUARD = '#[cfg(any(feature = "v3_24", feature = "dox"))]'
V3_24_DOC = '#[cfg_attr(feature = "dox", doc(cfg(feature = "v3_24")))]'

_VERSIONS = [None, Version(1, 0), Version(2, 56), Version(2, 58), Version(2, 58, 1), Version(3, 0)]


@pytest.mark.parametrize("version,baseline", list(itertools.product(_VERSIONS, _VERSIONS)))
def test_guard_needed_iff_version_strictly_newer_than_baseline(version, baseline):
    expected = version is not None and (baseline is None or version > baseline)

    assert should_generate(version, baseline) is expected
    assert (resolve_guard(version, baseline) is not None) is expected


def test_equal_version_and_baseline_needs_no_guard():
    assert resolve_guard(Version(2, 58), Version(2, 58)) is None


def test_guard_pair_rendering():
    guard = resolve_guard(Version(3, 24), Version(3, 22))

    assert guard == Guard('feature = "v3_24"')
    assert guard.render() == f"{V3_24_GUARD}\n{V3_24_DOC}"
    assert guard.render(with_doc=False) == V3_24_GUARD
    assert guard.complement_attr() == '#[cfg(not(any(feature = "v3_24", feature = "dox")))]'


def test_guard_with_namespace_prefix():
    guard = resolve_guard(Version(2, 58), Version(2, 56), "gio")

    assert guard.compile_attr(indent=1) == '\t#[cfg(any(feature = "gio_v2_58", feature = "dox"))]'


def test_env_guard_uses_namespace_baseline_and_prefix(env):
    assert resolve_env_guard(env, None, Version(3, 22)) is None
    assert resolve_env_guard(env, None, Version(3, 24)) == Guard('feature = "v3_24"')
    # Gio's own baseline (2.56) applies, not the main crate's
    assert resolve_env_guard(env, GIO, Version(2, 56)) is None
    assert resolve_env_guard(env, GIO, Version(2, 58)) == Guard('feature = "gio_v2_58"')


def test_version_condition_writes_both_attributes(env):
    text = rendered(version_condition, env, None, Version(3, 24), False, 0)

    assert text == f"{V3_24_GUARD}\n{V3_24_DOC}\n"


def test_version_condition_commented_and_indented(env):
    text = rendered(version_condition, env, None, Version(3, 24), True, 2)

    assert text == f"\t\t//{V3_24_GUARD}\n\t\t//{V3_24_DOC}\n"


def test_version_condition_writes_nothing_when_not_needed(env):
    assert rendered(version_condition, env, None, None, False, 0) == ""
    assert rendered(version_condition, env, None, Version(3, 10), False, 0) == ""
    assert version_condition_string(env, GOBJECT, Version(2, 56), False, 0) is None


def test_version_condition_no_doc(env):
    text = rendered(version_condition_no_doc, env, GIO, Version(2, 60), False, 1)

    assert text == '\t#[cfg(any(feature = "gio_v2_60", feature = "dox"))]\n'


def test_version_condition_doc_only(env):
    assert rendered(version_condition_doc, env, Version(3, 24), False, 0) == f"{V3_24_DOC}\n"
    assert rendered(version_condition_doc, env, Version(3, 22), False, 0) == ""


def test_not_version_condition(env):
    text = rendered(not_version_condition, Version(3, 24), False, 0)

    assert text == (
        '#[cfg(any(not(feature = "v3_24"), feature = "dox"))]\n'
        '#[cfg_attr(feature = "dox", doc(cfg(not(feature = "v3_24"))))]\n'
    )
    assert rendered(not_version_condition, None, False, 0) == ""


def test_not_version_condition_no_dox(env):
    assert rendered(not_version_condition_no_dox, env, None, Version(3, 24), False, 0) == (
        '#[cfg(not(any(feature = "v3_24", feature = "dox")))]\n'
    )
    assert rendered(not_version_condition_no_dox, env, GIO, Version(2, 58), True, 1) == (
        '\t//#[cfg(not(any(feature = "gio_v2_58", feature = "dox")))]\n'
    )


def test_raw_cfg_conditions():
    cfg = 'all(unix, feature = "v3_24")'

    assert rendered(cfg_condition_no_doc, cfg, False, 0) == f'#[cfg(any({cfg}, feature = "dox"))]\n'
    assert rendered(cfg_condition_doc, cfg, False, 0) == f'#[cfg_attr(feature = "dox", doc(cfg({cfg})))]\n'
    assert rendered(cfg_condition, cfg, False, 0) == (
        f'#[cfg(any({cfg}, feature = "dox"))]\n#[cfg_attr(feature = "dox", doc(cfg({cfg})))]\n'
    )
    assert cfg_condition_string(None, False, 0) is None
    assert rendered(cfg_condition, None, False, 0) == ""


@pytest.mark.parametrize("features", [set(), {"v3_24"}, {"dox"}, {"v3_24", "dox"}, {"v3_22"}])
def test_guard_and_complement_are_mutually_exclusive_and_exhaustive(features):
    guard = Guard(Version(3, 24).to_cfg())
    on = is_active(cfg_attr_predicate(guard.compile_attr()), features)
    off = is_active(cfg_attr_predicate(guard.complement_attr()), features)

    assert on != off
