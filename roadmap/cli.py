#!/usr/bin/env python3
"""Roadmap CLI entrypoint."""

import sys
import argparse
import logging

from roadmap.commands.validate import KINDS, cmd_validate


def main(argv=None):
    parser = argparse.ArgumentParser(prog='roadmap', description='Roadmap data model tools')
    subparsers = parser.add_subparsers(dest='command', required=True)

    # roadmap validate
    p_validate = subparsers.add_parser('validate', help='Validate a JSON/YAML payload file')
    p_validate.add_argument('file', help='Payload file (.json, .yaml or .yml)')
    p_validate.add_argument('--kind', '-k', choices=KINDS, help='Payload kind (detected from keys if omitted)')
    p_validate.add_argument('--strict', action='store_true', help='Treat level and type conventions as errors')
    p_validate.add_argument('--config', '-c', help='Directory containing roadmap.yaml (default: current directory)')
    p_validate.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    p_validate.set_defaults(func=cmd_validate)

    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
