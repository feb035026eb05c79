"""
xrawconv - Node Region to XRAW Converter
========================================

Converts exported node regions into XRAW voxel files:
- Plain-text region exports (SizeX/SizeY/SizeZ header plus node list)
- Node color tables (NodeName R G B [A])
- 8-bit indexed XRAW output with a 256-entry RGBA palette

Version: 1.0.0
"""

__version__ = "1.0.0"
__license__ = "MIT"

from xrawconv.core.region import Region, RegionParser
from xrawconv.core.colors import ColorTable, ColorTableParser
from xrawconv.core.palette import NodePalette, PaletteResolver
from xrawconv.formats.xraw import XrawFormat
from xrawconv.converter import Converter, ConverterOptions, ConversionResult

__all__ = [
    'Region', 'RegionParser', 'ColorTable', 'ColorTableParser',
    'NodePalette', 'PaletteResolver', 'XrawFormat',
    'Converter', 'ConverterOptions', 'ConversionResult', '__version__',
]
