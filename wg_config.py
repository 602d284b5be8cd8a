#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import dataclass, field
from typing import List, Optional

from wg_version import Version

GENERATOR_NAME = "wrapgen"
GENERATOR_VERSION = "0.1.0"


@dataclass(frozen=True)
class GirVersionInfo:
    """Provenance of one library description the bindings were generated from."""
    gir_dir: str
    repository_url: Optional[str] = None
    hash: Optional[str] = None


@dataclass
class Config:
    """
    Per-run generator configuration.

    Attributes:
        min_cfg_version:        Oldest library version supported by the main crate.
                                Symbols introduced at or before it are never guarded.
        girs_version:           Library descriptions the bindings come from (for file headers).
        single_version_file:    If set, version details live in that one file and
                                per-file headers only name the sources.
        generator_version:      Version string written into headers.
    """
    min_cfg_version: Version = field(default_factory=lambda: Version(0, 0))
    girs_version: List[GirVersionInfo] = field(default_factory=list)
    single_version_file: Optional[str] = None
    generator_version: str = GENERATOR_VERSION
