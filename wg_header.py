#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from wg_config import GENERATOR_NAME, Config, GirVersionInfo
from wg_writer import Sink, writeln


def _source_line(info: GirVersionInfo, prefix: str, with_hash: bool) -> str:
    if with_hash:
        if info.hash is None:
            return f"{prefix}from {info.gir_dir}"
        if info.repository_url is None:
            return f"{prefix}from {info.gir_dir} (@ {info.hash})"
        return f"{prefix}from {info.gir_dir} ({info.repository_url} @ {info.hash})"
    if info.repository_url is None:
        return f"{prefix}from {info.gir_dir}"
    return f"{prefix}from {info.gir_dir} ({info.repository_url})"


def start_comments(w: Sink, conf: Config) -> None:
    """File banner. With a single version file, per-file banners omit versions."""
    if conf.single_version_file is not None:
        start_comments_no_version(w, conf)
    else:
        single_version_file(w, conf, "// ")
        writeln(w, "// DO NOT EDIT")


def start_comments_no_version(w: Sink, conf: Config) -> None:
    writeln(w, f"// This file was generated by {GENERATOR_NAME}")
    for info in conf.girs_version:
        writeln(w, _source_line(info, "// ", with_hash=False))
    writeln(w, "// DO NOT EDIT")


def single_version_file(w: Sink, conf: Config, prefix: str) -> None:
    """Generator version plus the exact revision of every source description."""
    writeln(w, f"{prefix}Generated by {GENERATOR_NAME} @ {conf.generator_version}")
    for info in conf.girs_version:
        writeln(w, _source_line(info, prefix, with_hash=True))
