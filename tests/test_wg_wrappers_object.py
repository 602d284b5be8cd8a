#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from conftest import GIO, GOBJECT, GTK, rendered, type_id
from wg_attrs import Derive, Visibility
from wg_library import AncestorStatus, StatusedTypeId
from wg_wrappers import ObjectOrInterface, WrapperInfo, render


def ancestor(library, ns_id, name, status=AncestorStatus.ACTIVE):
    return StatusedTypeId(type_id(library, ns_id, name), name, status)


def test_object_with_classes_and_interfaces(library, env):
    info = WrapperInfo("Button", "GtkButton", doc_alias="GtkButton")
    kind = ObjectOrInterface("gtk_button_get_type", class_struct="GtkButtonClass", parents=(
        ancestor(library, GTK, "Bin"),
        ancestor(library, GTK, "Widget"),
        ancestor(library, GOBJECT, "InitiallyUnowned"),
        ancestor(library, GTK, "Buildable"),
        ancestor(library, GTK, "Actionable"),
    ))

    assert rendered(render, env, info, kind) == (
        "glib::wrapper! {\n"
        '\t#[doc(alias = "GtkButton")]\n'
        "\tpub struct Button(Object<ffi::GtkButton, ffi::GtkButtonClass>)"
        " @extends Bin, Widget, glib::InitiallyUnowned, @implements Buildable, Actionable;\n"
        "\n"
        "\tmatch fn {\n"
        "\t\ttype_ => || ffi::gtk_button_get_type(),\n"
        "\t}\n"
        "}\n"
    )


def test_object_with_only_interfaces(library, env):
    kind = ObjectOrInterface("gtk_thing_get_type", parents=(
        ancestor(library, GTK, "Buildable"),
        ancestor(library, GIO, "File"),
    ))

    text = rendered(render, env, WrapperInfo("Thing", "GtkThing"), kind)

    assert "\tpub struct Thing(Object<ffi::GtkThing>) @implements Buildable, gio::File;\n" in text


def test_interface_lists_prerequisites(library, env):
    kind = ObjectOrInterface("gtk_editable_get_type", is_interface=True, parents=(
        ancestor(library, GTK, "Widget"),
        ancestor(library, GIO, "File"),
    ))

    text = rendered(render, env, WrapperInfo("Editable", "GtkEditable"), kind)

    assert "\tpub struct Editable(Interface<ffi::GtkEditable>) @requires Widget, gio::File;\n" in text


def test_no_parents(env):
    kind = ObjectOrInterface("g_thing_get_type")

    assert rendered(render, env, WrapperInfo("Thing", "GThing"), kind) == (
        "glib::wrapper! {\n"
        "\tpub struct Thing(Object<ffi::GThing>);\n"
        "\n"
        "\tmatch fn {\n"
        "\t\ttype_ => || ffi::g_thing_get_type(),\n"
        "\t}\n"
        "}\n"
    )


def test_inactive_parents_are_left_out(library, env):
    kind = ObjectOrInterface("gtk_button_get_type", parents=(
        ancestor(library, GTK, "Bin", AncestorStatus.IGNORED),
        ancestor(library, GTK, "Widget"),
        ancestor(library, GTK, "Buildable", AncestorStatus.UNSPECIFIED),
    ))

    text = rendered(render, env, WrapperInfo("Button", "GtkButton"), kind)

    assert "\tpub struct Button(Object<ffi::GtkButton>) @extends Widget;\n" in text


def test_visibility_and_derives(env):
    info = WrapperInfo(
        "Thing", "GThing",
        visibility=Visibility.CRATE,
        derives=(Derive(("Debug",)), Derive(("Hash", "Eq"), "unix")),
    )

    text = rendered(render, env, info, ObjectOrInterface("g_thing_get_type"))

    assert text.startswith(
        "glib::wrapper! {\n"
        "\t#[derive(Debug)]\n"
        "\t#[cfg_attr(unix, derive(Hash, Eq))]\n"
        "\tpub(crate) struct Thing(Object<ffi::GThing>);\n"
    )


def test_private_wrapper_has_no_visibility_marker(env):
    info = WrapperInfo("Thing", "GThing", visibility=Visibility.PRIVATE)

    text = rendered(render, env, info, ObjectOrInterface("g_thing_get_type"))

    assert "\tstruct Thing(Object<ffi::GThing>);\n" in text
