#!/usr/bin/env python3
"""
xrawconv - Node Region to XRAW Converter
========================================

Main entry point when running from a source checkout.

Usage:
    python main.py source [output] [--colors PATH] [--empty-node NAME]

Arguments:
    source    Region export to convert
    output    Optional XRAW output path
"""

import sys
from pathlib import Path

# Add the project root to path if needed
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


if __name__ == "__main__":
    from xrawconv.cli import main
    sys.exit(main())
