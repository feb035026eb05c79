"""
Converter - Region to XRAW Pipeline
===================================

Wires the region parser, color table parser, palette resolver and XRAW
encoder together. ``Converter.convert`` is a pure function of the two input
texts; ``convert_file`` and ``load_color_text`` add the file system lookups.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union
from dataclasses import dataclass, field

from xrawconv.core.colors import ColorTable, ColorTableParser
from xrawconv.core.errors import UnresolvedNameNotice, UnresolvedReason
from xrawconv.core.palette import AIR, NodePalette, PaletteResolver
from xrawconv.core.region import Region, RegionParser
from xrawconv.formats.xraw import XrawFormat

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / 'data'
DEFAULT_COLORS_PATH = DATA_DIR / 'Colors.txt'


@dataclass
class ConverterOptions:
    """
    Conversion settings.

    Attributes:
        empty_node_name: Node type forced to palette index 0
        colors_filename: Override file looked up in the working directory
        colors_path: Explicit color table; skips the working directory lookup
    """
    empty_node_name: str = AIR
    colors_filename: str = 'Colors.txt'
    colors_path: Optional[Path] = None


@dataclass
class ConversionResult:
    """Output of a conversion run."""
    data: bytes
    region: Region
    colors: ColorTable
    palette: NodePalette
    diagnostics: List[object] = field(default_factory=list)


def load_color_text(options: ConverterOptions = None,
                    working_dir: Union[str, Path] = None) -> Tuple[str, Path]:
    """
    Read the color table text.

    Uses ``options.colors_path`` when given, then ``colors_filename`` in the
    working directory, then the bundled default table.

    Returns:
        Tuple of (text, path it was read from)

    Raises:
        FileNotFoundError: If an explicit colors_path does not exist
    """
    options = options or ConverterOptions()

    if options.colors_path is not None:
        path = Path(options.colors_path)
        logger.info("Using color configuration file %s.", path)
    else:
        working_dir = Path(working_dir) if working_dir is not None else Path.cwd()
        override = working_dir / options.colors_filename
        if override.is_file():
            path = override
            logger.info("Custom color configuration file found (%s), use custom colors.", path)
        else:
            path = DEFAULT_COLORS_PATH
            logger.info("No custom color configuration file is found in current working "
                        "directory (%s), use internal colors.", working_dir)

    return path.read_text(encoding='utf-8'), path


class Converter:
    """
    Region to XRAW converter.

    Each call to ``convert`` uses fresh parsers, so one instance can be
    reused for any number of runs.
    """

    def __init__(self, options: ConverterOptions = None):
        self.options = options or ConverterOptions()

    def convert(self, region_text: str, color_text: str) -> ConversionResult:
        """
        Convert region text to XRAW bytes.

        Args:
            region_text: Region export text
            color_text: Color table text

        Returns:
            ConversionResult with the encoded bytes and every diagnostic

        Raises:
            FormatError: If a region size field is not an integer
            CapacityError: If more than 255 referenced node types have colors
        """
        diagnostics = []

        logger.info("Reading source region...")
        region_parser = RegionParser()
        region = region_parser.parse(region_text.splitlines())
        diagnostics.extend(region_parser.diagnostics)
        logger.info("%d nodes loaded.", len(region))
        if len(region) != region.volume:
            logger.debug("Region declares %d voxels but lists %d nodes.", region.volume, len(region))

        logger.info("Read color definitions...")
        color_parser = ColorTableParser()
        colors = color_parser.parse(color_text)
        diagnostics.extend(color_parser.diagnostics)
        logger.debug("%d color definitions loaded.", len(colors))

        for warning in diagnostics:
            logger.warning("%s", warning)

        logger.info("Preprocessing referenced colors...")
        resolver = PaletteResolver(self.options.empty_node_name)
        palette = resolver.resolve(region, colors)
        diagnostics.extend(resolver.diagnostics)
        self._log_unresolved(resolver, palette)

        logger.info("Convert source to XRAW format...")
        data = XrawFormat.encode(region, palette)

        return ConversionResult(data, region, colors, palette, diagnostics)

    def convert_file(self, source: Union[str, Path], target: Union[str, Path],
                     working_dir: Union[str, Path] = None) -> ConversionResult:
        """
        Convert a region file and write the XRAW file.

        The target is only opened once the whole stream has been encoded.
        """
        logger.info("Processing files: \n  Input - %s \n  Output - %s", source, target)

        region_text = Path(source).read_text(encoding='utf-8')
        color_text, _ = load_color_text(self.options, working_dir)

        result = self.convert(region_text, color_text)
        XrawFormat.save(target, result.region, result.palette)

        logger.info("Conversion finished.")
        return result

    @staticmethod
    def _log_unresolved(resolver: PaletteResolver, palette: NodePalette):
        logger.debug("%d palette entries resolved.", len(palette))

        if resolver.full_miss:
            logger.warning("None of the node types are recognized in color file, "
                           "please fix the following:")
        elif resolver.missing:
            # Counts "air" and "ignore" too
            logger.warning("%d colors are not found in color presets, please fix the following:",
                           len(resolver.missing))

        notices: List[UnresolvedNameNotice] = resolver.diagnostics
        for notice in notices:
            if notice.reason is UnresolvedReason.NO_MATCH:
                logger.warning("  %s", notice)
            else:
                logger.info("  %s", notice)
