"""
Command line interface for xrawconv.

Usage:
    xrawconv SOURCE [OUTPUT] [--colors PATH] [--empty-node NAME] [--debug]
"""

import sys
import logging
import argparse
from pathlib import Path

from xrawconv import __version__
from xrawconv.converter import Converter, ConverterOptions
from xrawconv.core.errors import ConversionError, ExitCode

logger = logging.getLogger(__name__)

XRAW_SUFFIX = '.xraw'


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog='xrawconv',
        description='Convert an exported node region into an XRAW voxel file',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Color definitions are read from --colors if given, otherwise from
Colors.txt in the current working directory, otherwise from the
built-in table.

Examples:
  %(prog)s house.txt                 Write house.xraw
  %(prog)s house.txt out/house.xraw  Write to an explicit path
        """
    )

    parser.add_argument(
        'source',
        nargs='?',
        help='Region export to convert'
    )

    parser.add_argument(
        'output',
        nargs='?',
        help='Output XRAW file (default: source with .xraw suffix)'
    )

    parser.add_argument(
        '--colors',
        type=Path,
        default=None,
        help='Color definition file (NodeName R G B [A] per line)'
    )

    parser.add_argument(
        '--empty-node',
        default=ConverterOptions.empty_node_name,
        help='Node type stored as palette index 0 (default: %(default)s)'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Run the converter and return an ExitCode."""
    args = parse_arguments(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format='%(levelname)s: %(message)s'
    )

    if not args.source:
        logger.error("Not enough arguments.")
        return ExitCode.INSUFFICIENT_ARGUMENTS

    source = Path(args.source)
    target = Path(args.output) if args.output else source.with_suffix(XRAW_SUFFIX)

    options = ConverterOptions(empty_node_name=args.empty_node, colors_path=args.colors)

    try:
        Converter(options).convert_file(source, target)
    except FileNotFoundError as e:
        logger.error("File not found: %s", e.filename)
        return ExitCode.FILE_NOT_FOUND
    except ConversionError as e:
        logger.error("%s", e)
        return e.exit_code

    return ExitCode.SUCCESS


if __name__ == '__main__':
    sys.exit(main())
