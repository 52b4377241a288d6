"""
Command-line interface for nnstensors.

This module provides CLI commands for computing tensor sizes and
checking raw tensor payload files against a tensor layout.
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from .core.info import TensorsInfo
from .exceptions import NNSTensorsError
from .ingest import read_raw_data

COMMANDS = ('size', 'check-raw')


def parse_tensor(text: str) -> Dict[str, Any]:
    """Parse ``TYPE:D1,D2,...`` into a type name and a shape."""
    type_name, sep, dims = text.partition(':')
    if not sep or not dims:
        raise argparse.ArgumentTypeError(f"Expected TYPE:D1,D2,... but got {text!r}")
    try:
        shape = [int(dim) for dim in dims.split(',')]
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid dimensions in {text!r}") from None
    return {'type': type_name, 'shape': shape}


def build_info(tensors: List[Dict[str, Any]]) -> TensorsInfo:
    info = TensorsInfo()
    for tensor in tensors:
        info.add_tensor_info(tensor['type'], tensor['shape'])
    return info


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--tensor', type=parse_tensor, action='append', required=True,
                        help='Tensor layout as TYPE:D1,D2,... (repeat for several tensors)')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


def size_command(argv: Optional[List[str]] = None) -> int:
    """CLI command printing the byte size of each tensor."""
    parser = argparse.ArgumentParser(prog='nnstensors size',
                                     description='Compute tensor byte sizes')
    _add_common_arguments(parser)
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        info = build_info(args.tensor)
    except NNSTensorsError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    results = {
        'tensors': [
            {
                'index': index,
                'type': entry.tensor_type.name,
                'shape': list(entry.shape),
                'size': entry.byte_size,
            }
            for index, entry in enumerate(info)
        ],
        'total_size': info.total_byte_size(),
    }
    print(json.dumps(results, indent=2))
    return 0


def check_raw_command(argv: Optional[List[str]] = None) -> int:
    """CLI command checking that a raw file exactly fills one tensor."""
    parser = argparse.ArgumentParser(prog='nnstensors check-raw',
                                     description='Check a raw tensor file against a layout')
    parser.add_argument('file', help='Raw tensor payload file')
    parser.add_argument('--index', type=int, default=0, help='Tensor index the file fills')
    _add_common_arguments(parser)
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        info = build_info(args.tensor)
        with read_raw_data(args.file, info, index=args.index) as data:
            size = data.get_tensor_data(args.index).size
    except NNSTensorsError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(json.dumps({'file': args.file, 'index': args.index, 'size': size, 'valid': True}, indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)

    if not argv or argv[0] not in COMMANDS:
        print("Usage: nnstensors <command> [options]", file=sys.stderr)
        print(f"Commands: {', '.join(COMMANDS)}", file=sys.stderr)
        return 2

    command, rest = argv[0], argv[1:]
    if command == 'size':
        return size_command(rest)
    return check_raw_command(rest)


if __name__ == '__main__':
    sys.exit(main())
