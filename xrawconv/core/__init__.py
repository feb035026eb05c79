"""
xrawconv Core Module
====================

Region and color table parsing and palette resolution.
"""

from xrawconv.core.errors import (
    ExitCode, ConversionError, FormatError, CapacityError,
    MalformedLineWarning, UnresolvedNameNotice, UnresolvedReason,
)
from xrawconv.core.region import Node, Region, RegionParser
from xrawconv.core.colors import ColorDefinition, ColorTable, ColorTableParser
from xrawconv.core.palette import NodePalette, PaletteResolver

__all__ = [
    'ExitCode', 'ConversionError', 'FormatError', 'CapacityError',
    'MalformedLineWarning', 'UnresolvedNameNotice', 'UnresolvedReason',
    'Node', 'Region', 'RegionParser',
    'ColorDefinition', 'ColorTable', 'ColorTableParser',
    'NodePalette', 'PaletteResolver',
]
