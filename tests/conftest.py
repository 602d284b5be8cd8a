#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from wg_config import Config
from wg_env import Env
from wg_library import ClassType, InterfaceType, Library, Namespace, TypeId
from wg_version import Version
from wg_writer import SourceBuffer

# Namespace ids in the `library` fixture.
GTK = 0
GOBJECT = 1
GIO = 2
GST = 3


@pytest.fixture
def library() -> Library:
    """
    A small multi-namespace library:

        Gtk (main, baseline from config 3.22): Widget, Bin (classes); Buildable, Actionable (interfaces)
        GObject (2.56): Object (ref/unref), InitiallyUnowned
        Gio (2.56): File (interface)
        Gst (1.14): Object (no ref/unref), MiniObject (ref/unref)
    """
    lib = Library()
    lib.add_namespace(Namespace("Gtk", "gtk", "ffi"))
    lib.add_namespace(Namespace("GObject", "glib", "gobject_ffi", Version(2, 56)))
    lib.add_namespace(Namespace("Gio", "gio", "gio::ffi", Version(2, 56)))
    lib.add_namespace(Namespace("Gst", "gst", "gst::ffi", Version(1, 14)))

    lib.add_type(GTK, ClassType("Widget", "GtkWidget", "gtk_widget_get_type"))
    lib.add_type(GTK, ClassType("Bin", "GtkBin", "gtk_bin_get_type"))
    lib.add_type(GTK, InterfaceType("Buildable", "GtkBuildable", "gtk_buildable_get_type"))
    lib.add_type(GTK, InterfaceType("Actionable", "GtkActionable", "gtk_actionable_get_type"))

    lib.add_type(GOBJECT, ClassType("Object", "GObject", "g_object_get_type", "g_object_ref", "g_object_unref"))
    lib.add_type(GOBJECT, ClassType("InitiallyUnowned", "GInitiallyUnowned", "g_initially_unowned_get_type"))

    lib.add_type(GIO, InterfaceType("File", "GFile", "g_file_get_type"))

    lib.add_type(GST, ClassType("Object", "GstObject", "gst_object_get_type"))
    lib.add_type(GST, ClassType("MiniObject", "GstMiniObject", "gst_mini_object_get_type",
                                "gst_mini_object_ref", "gst_mini_object_unref"))
    return lib


@pytest.fixture
def env(library: Library) -> Env:
    return Env(library, Config(min_cfg_version=Version(3, 22)))


def type_id(library: Library, ns_id: int, name: str) -> TypeId:
    tid = library.find_type(ns_id, name)
    assert tid is not None, f"test library has no {name} in namespace {ns_id}"
    return tid


def rendered(render_fn, *args, **kwargs) -> str:
    """Run a `render_fn(w, ...)` style renderer into a fresh buffer and return the text."""
    buf = SourceBuffer()
    render_fn(buf, *args, **kwargs)
    return buf.to_string()
