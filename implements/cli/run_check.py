#!/usr/bin/env python3
# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""CLI entry point for validating interfaces and matching implementations."""

import argparse
import json
import logging
import sys
from typing import List, Optional

from ..api import match_report, validate_report
from ..config.match_options import MatchOptions
from ..config.settings import ImplementsSettings
from ..exceptions import ImplementsError
from ..models.diagnostics import DiagnosticReport
from ..utils.reference_loader import load_reference

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_DIAGNOSTICS = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='implements-check',
        description='Validate an interface, or match an implementation against it',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "references have the form 'package.module:attribute'\n"
            "options: i=validate first, r=recursive, f=no extra functions, m=no extra members"
        ),
    )
    parser.add_argument('interface', help='Reference to the interface value')
    parser.add_argument(
        'candidate',
        nargs='?',
        default=None,
        help='Reference to the implementation (omit to only validate the interface)',
    )
    parser.add_argument(
        '-o', '--options',
        default=None,
        help='Match option characters (default: settings default_options)',
    )
    parser.add_argument(
        '--format',
        choices=['human', 'json', 'github-actions'],
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument(
        '--config',
        default=None,
        help='YAML settings file (default: IMPLEMENTS_* environment variables)',
    )
    return parser


def print_report(report: DiagnosticReport, args: argparse.Namespace, options: str) -> None:
    """Print a report in the requested format."""
    subject = args.interface if args.candidate is None else f"{args.candidate} -> {args.interface}"

    if args.format == 'json':
        output = {
            'interface': args.interface,
            'candidate': args.candidate,
            'options': options,
            'errors': len(report.diagnostics),
            'diagnostics': report.to_dicts(),
        }
        print(json.dumps(output, indent=2))
    elif args.format == 'github-actions':
        for diagnostic in report.diagnostics:
            print(f"::error title={subject}::{diagnostic.render()}")
    else:  # human-readable
        if report.ok:
            print(f"{subject}: OK")
            return
        print(f"{subject}:")
        for diagnostic in report.diagnostics:
            print(f"  ERROR[{diagnostic.category.value}]: {diagnostic.render()}")


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the implements-check CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.config:
            settings = ImplementsSettings.from_yaml(args.config)
        else:
            settings = ImplementsSettings.from_env()
    except ImplementsError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_USAGE)

    settings.set_logging()

    options = args.options if args.options is not None else settings.default_options

    try:
        intf = load_reference(args.interface)
        candidate = load_reference(args.candidate) if args.candidate is not None else None
    except ImplementsError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_USAGE)

    if args.candidate is None:
        logger.info(f"Validating interface {args.interface}")
        report = validate_report(intf)
    else:
        logger.info(f"Matching {args.candidate} against {args.interface} with options '{options}'")
        report = match_report(intf, candidate, options)

    try:
        canonical = MatchOptions.parse(options).to_string()
    except ImplementsError:
        canonical = options
    print_report(report, args, canonical)

    sys.exit(EXIT_OK if report.ok else EXIT_DIAGNOSTICS)


if __name__ == '__main__':
    main()
