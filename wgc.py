#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import argparse
from pathlib import Path
from typing import Optional

from wg_cfg_expr import CfgSyntaxError, is_active
from wg_context import GenerationContext, LogLevel
from wg_driver import generate_module, write_versions_file
from wg_guards import resolve_guard
from wg_internal_error import InternalGeneratorError
from wg_loader import DescriptionError, load_description
from wg_logger import log_error, log_info
from wg_version import Version, format_version
from wg_writer import SourceBuffer


def build_generation_context(args: argparse.Namespace) -> GenerationContext:
    """Build a GenerationContext from command-line arguments."""
    verbosity = getattr(args, 'verbosity', 0)
    if verbosity >= 3:
        log_level = LogLevel.DEBUG
    elif verbosity >= 1:
        log_level = LogLevel.INFO
    else:
        log_level = LogLevel.ERROR

    return GenerationContext(
        log_rich_format=getattr(args, 'log', False),
        log_level=log_level,
    )


def cmd_gen(args: argparse.Namespace) -> int:
    """Generate a binding module from a JSON description."""
    context = build_generation_context(args)
    log_info(context, f"Loading description: {args.description}")
    try:
        desc = load_description(Path(args.description), context)
    except OSError as e:
        log_error(context, f"error: [WGC-0010] cannot read {args.description}: {e}")
        return 1
    except DescriptionError as e:
        log_error(context, f"error: {e}")
        return 1

    try:
        code = generate_module(desc)
    except InternalGeneratorError as e:
        log_error(context, e.format())
        return 1

    if args.output:
        Path(args.output).write_text(code, encoding="utf-8")
        log_info(context, f"Wrote {args.output}")
    else:
        print(code, end="")

    if args.versions_file:
        buf = SourceBuffer()
        write_versions_file(buf, desc.env.config)
        Path(args.versions_file).write_text(buf.to_string(), encoding="utf-8")
        log_info(context, f"Wrote {args.versions_file}")

    return 0


def _parse_version_arg(text: Optional[str]) -> Optional[Version]:
    if text is None:
        return None
    return Version.parse(text)


def cmd_guard(args: argparse.Namespace) -> int:
    """Print the guard a symbol of the given version needs (nothing if none)."""
    context = build_generation_context(args)
    try:
        version = _parse_version_arg(args.version)
        baseline = _parse_version_arg(args.baseline)
    except ValueError as e:
        log_error(context, f"error: [WGC-0020] {e}")
        return 1

    guard = resolve_guard(version, baseline, args.prefix)
    if guard is None:
        log_info(context, f"{version} needs no guard against baseline {format_version(baseline)}")
        return 0
    if args.complement:
        print(guard.complement_attr())
    else:
        print(guard.render(with_doc=not args.no_doc))
    return 0


def cmd_cfg(args: argparse.Namespace) -> int:
    """Evaluate a cfg predicate; exit 0 if active, 3 if not."""
    context = build_generation_context(args)
    try:
        active = is_active(args.predicate, set(args.feature), set(args.flag))
    except CfgSyntaxError as e:
        log_error(context, f"error: {e}")
        return 1
    print("active" if active else "inactive")
    return 0 if active else 3


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(prog="wgc", description="Binding wrapper generator")
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    parser.add_argument("-v", "--verbose",
                        action='count',
                        default=0,
                        dest='verbosity',
                        help="Increase verbosity: -v=INFO, -vvv=DEBUG")
    parser.add_argument("-l", "--log",
                        action='store_true',
                        default=False,
                        help="Enable rich log formatting (timestamps, levels)")

    ###########################
    # gen command
    ###########################
    p_gen = subparsers.add_parser("gen", help="Generate a binding module")
    p_gen.add_argument("description", help="JSON binding description")
    p_gen.add_argument("--output", "-o", help="Output file (default: stdout)")
    p_gen.add_argument("--versions-file", help="Also write the single version file to this path")
    p_gen.set_defaults(func=cmd_gen)

    ###########################
    # guard command
    ###########################
    p_guard = subparsers.add_parser("guard", help="Show the guard for a symbol version")
    p_guard.add_argument("version", help="Version the symbol appeared in (e.g. 2.58)")
    p_guard.add_argument("--baseline", "-b", help="Minimum version the crate supports")
    p_guard.add_argument("--prefix", "-p", help="Feature prefix (crate name of a non-main namespace)")
    p_guard.add_argument("--no-doc", action="store_true", help="Omit the documentation attribute")
    p_guard.add_argument("--complement", action="store_true", help="Print the complement guard instead")
    p_guard.set_defaults(func=cmd_guard)

    ###########################
    # cfg command
    ###########################
    p_cfg = subparsers.add_parser("cfg", help="Evaluate a cfg predicate")
    p_cfg.add_argument("predicate", help='Predicate, e.g. \'any(feature = "v2_58", feature = "dox")\'')
    p_cfg.add_argument("--feature", "-F", action="append", default=[], help="Enabled cargo feature")
    p_cfg.add_argument("--flag", action="append", default=[], help="Enabled bare cfg flag")
    p_cfg.set_defaults(func=cmd_cfg)

    args = parser.parse_args(argv)

    rc = args.func(args)
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
