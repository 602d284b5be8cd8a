"""
Logging utilities for the wrapper generator.

This module provides logging functions that respect the GenerationContext
log level and format flags. Messages go to stderr so generated code written
to stdout stays clean.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import sys
import time
from typing import Optional

from wg_context import GenerationContext, LogLevel


_LEVEL_TAGS = {
    LogLevel.ERROR: "ERROR",
    LogLevel.WARNING: "WARNING",
    LogLevel.INFO: "INFO",
    LogLevel.DEBUG: "DEBUG",
}


def log(context: Optional[GenerationContext], log_level: LogLevel, message: str) -> None:
    """
    Log a message if the context's level admits it.

    Args:
        context:    The generation context holding the logging level.
        log_level:  The level of the message to log.
        message:    The message to log.
    """
    if context is None:
        print("No context provided for logging.", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        return
    if context.log_level < log_level:
        return
    prefix = ""
    if context.log_rich_format and log_level in _LEVEL_TAGS:
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
        prefix = f"{timestamp} [{_LEVEL_TAGS[log_level]}] "
    print(f"{prefix}{message}", file=sys.stderr)


def log_error(context: Optional[GenerationContext], message: str) -> None:
    """
    Log an error-level message if the logging level is ERROR or higher.

    Args:
        context: The generation context holding the logging level.
        message: The message to log.
    """
    log(context, LogLevel.ERROR, message)


def log_warning(context: Optional[GenerationContext], message: str) -> None:
    """
    Log a warning-level message if the logging level is WARNING or higher.

    Args:
        context: The generation context holding the logging level.
        message: The message to log.
    """
    log(context, LogLevel.WARNING, message)


def log_info(context: Optional[GenerationContext], message: str) -> None:
    """
    Log an info-level message if the logging level is INFO or higher.

    Args:
        context: The generation context holding the logging level.
        message: The message to log.
    """
    log(context, LogLevel.INFO, message)


def log_debug(context: Optional[GenerationContext], message: str) -> None:
    """
    Log a debug-level message if the logging level is DEBUG or higher.

    Args:
        context: The generation context holding the logging level.
        message: The message to log.
    """
    log(context, LogLevel.DEBUG, message)


def log_stage(context: Optional[GenerationContext], stage: str, subject: Optional[str] = None) -> None:
    """
    Log the start of a generation stage.

    Args:
        context: The generation context.
        stage:   Name of the stage (e.g., "Rendering imports").
        subject: Optional name of the module or type being processed.
    """
    if subject:
        log(context, LogLevel.INFO, f"{stage} '{subject}'")
    else:
        log(context, LogLevel.INFO, f"{stage}...")
