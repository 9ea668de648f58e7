#!/usr/bin/env python3
"""
CLI for the FDL compiler and runner.

Usage:
    python -m fdl run FILE.fdl [--output FILE] [--config FILE]
    python -m fdl check FILE.fdl
    python -m fdl parse FILE.fdl
    python -m fdl types

Examples:
    # Check syntax only
    python -m fdl check patients.fdl

    # Show the parsed statements
    python -m fdl parse patients.fdl

    # Run and print the bundle as JSON
    python -m fdl run patients.fdl

    # Run and write the bundle to a file
    python -m fdl run patients.fdl --output bundle.json
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional


def _read_source(path_str: str) -> Optional[str]:
    source_path = Path(path_str)
    if not source_path.exists():
        print(f"Error: File not found: {source_path}", file=sys.stderr)
        return None
    return source_path.read_text(encoding="utf-8")


def cmd_check(args):
    """Check an FDL file for syntax errors."""
    from . import ErrorReporter, tokenize, parse, resolve

    source = _read_source(args.file)
    if source is None:
        return 1

    reporter = ErrorReporter()
    statements = parse(tokenize(source, reporter), reporter)

    if reporter.has_static_errors:
        print(f"Check failed with {len(reporter.static_errors)} error(s):")
        for diag in reporter.static_errors:
            print(f"  {diag.format()}")
        return 1

    table = resolve(statements)
    print(f"OK: {Path(args.file).name} - {len(statements)} statement(s), "
          f"{len(set(table.paths()))} distinct path(s), no errors")
    return 0


def cmd_parse(args):
    """Print the AST of an FDL file."""
    from . import ErrorReporter, tokenize, parse, format_ast

    source = _read_source(args.file)
    if source is None:
        return 1

    reporter = ErrorReporter()
    statements = parse(tokenize(source, reporter), reporter)
    if statements:
        print(format_ast(statements))

    for diag in reporter.static_errors:
        print(diag.format(), file=sys.stderr)
    return 1 if reporter.has_static_errors else 0


def cmd_types(args):
    """List the element types a listing may name."""
    from .models import Resource
    from .runtime import ModelElementProvider

    provider = ModelElementProvider()
    for name in provider.type_names():
        kind = "resource" if issubclass(provider.registry[name], Resource) else "element"
        print(f"  {name} ({kind})")
    return 0


def cmd_run(args, settings):
    """Run an FDL file and print the bundle."""
    from . import compile_and_run

    source = _read_source(args.file)
    if source is None:
        return 1

    result = compile_and_run(source, settings=settings)
    if not result.success:
        print(result.format_errors(), file=sys.stderr)
        return 1

    output = result.bundle.to_json(indent=settings.pretty)
    if args.output:
        Path(args.output).write_text(output + "\n", encoding="utf-8")
        print(f"Wrote {len(result.bundle)} resource(s) to: {args.output}")
    else:
        print(output)
    return 0


def main(argv=None):
    from .config import load_settings

    parser = argparse.ArgumentParser(
        prog='python -m fdl',
        description='FDL compiler and runner',
    )
    parser.add_argument('-c', '--config', metavar='FILE',
                        help='YAML settings file (default: $FDL_CONFIG or ~/.config/fdl/config.yaml)')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log debug output')

    subparsers = parser.add_subparsers(dest='action', required=True)

    # check command
    check_parser = subparsers.add_parser('check', help='Check FDL file for syntax errors')
    check_parser.add_argument('file', help='FDL source file')

    # parse command
    parse_parser = subparsers.add_parser('parse', help='Print the parsed statements')
    parse_parser.add_argument('file', help='FDL source file')

    # types command
    subparsers.add_parser('types', help='List known element types')

    # run command
    run_parser = subparsers.add_parser('run', help='Run FDL file and print the bundle')
    run_parser.add_argument('file', help='FDL source file')
    run_parser.add_argument('-o', '--output', metavar='FILE',
                            help='Write bundle JSON to FILE instead of stdout')
    run_parser.add_argument('-c', '--config', dest='run_config', metavar='FILE',
                            help='YAML settings file for this run')

    args = parser.parse_args(argv)

    try:
        settings = load_settings(getattr(args, 'run_config', None) or args.config)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.action == 'check':
        return cmd_check(args)
    elif args.action == 'parse':
        return cmd_parse(args)
    elif args.action == 'types':
        return cmd_types(args)
    elif args.action == 'run':
        return cmd_run(args, settings)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
