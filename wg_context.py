"""
Generation context for cross-cutting generator options.

This module defines the GenerationContext dataclass which holds options that
affect every stage of generation (logging, for now).
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Hierarchical logging levels for the generator."""
    SILENT = 0      # No logging
    ERROR = 3       # Error messages only
    WARNING = 6     # Warning messages (default)
    INFO = 10       # General progress messages (-v)
    DEBUG = 30      # Detailed resolution traces (-vvv)


@dataclass
class GenerationContext:
    """
    Holds cross-cutting generator options.

    Attributes:
        log_rich_format:        If True, emit logs in rich format: timestamp and level prefix.
        log_level:              Current logging level.
    """
    log_rich_format: bool = False
    log_level: LogLevel = LogLevel.WARNING

    @staticmethod
    def default() -> 'GenerationContext':
        """Create a GenerationContext with default settings."""
        return GenerationContext(log_level=LogLevel.WARNING)
