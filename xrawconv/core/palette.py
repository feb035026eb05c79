"""
NodePalette - Node Color Palette
================================

Resolves the node names used by a region into an indexed color palette.

Index 0 is reserved for the empty node type so that it always decodes as
"no voxel". Node types without a color definition fall back to index 1.
"""

import numpy as np
from typing import List, Dict, Optional, Union

from xrawconv.core.colors import ColorDefinition, ColorTable
from xrawconv.core.errors import CapacityError, UnresolvedNameNotice, UnresolvedReason
from xrawconv.core.region import Region

AIR = "air"
IGNORE = "ignore"

EMPTY_INDEX = 0
FALLBACK_INDEX = 1
MAX_COLORS = 255
PALETTE_SIZE = 256


class NodePalette:
    """
    Ordered node colors with a name to index mapping.

    Attributes:
        colors: Palette entries, index 0 being the empty node type
        indices: Node name to position in ``colors``
    """

    def __init__(self, colors: List[ColorDefinition] = None,
                 indices: Dict[str, int] = None):
        self.colors: List[ColorDefinition] = list(colors or [])
        if indices is None:
            indices = {color.name: i for i, color in enumerate(self.colors)}
        self.indices: Dict[str, int] = dict(indices)

    def __len__(self) -> int:
        return len(self.colors)

    def __contains__(self, name: str) -> bool:
        return name in self.indices

    def index_of(self, name: str) -> int:
        """
        Palette index used for a voxel of the given node type.

        "air" is always empty even when the color table defines it. Any other
        name without an entry, "ignore" included, resolves to the fallback
        index.
        """
        if name == AIR:
            return EMPTY_INDEX
        if name in self.indices:
            return self.indices[name]
        return FALLBACK_INDEX

    def get_rgba_array(self) -> np.ndarray:
        """
        Get the full 256-entry palette as a (256, 4) uint8 array.

        Slots past the real colors hold a grey ramp (i, i, i, 255).
        """
        ramp = np.arange(PALETTE_SIZE, dtype=np.uint8)
        rgba = np.empty((PALETTE_SIZE, 4), dtype=np.uint8)
        rgba[:, :3] = ramp[:, np.newaxis]
        rgba[:, 3] = 255
        if self.colors:
            rgba[:len(self.colors)] = [c.to_tuple() for c in self.colors]
        return rgba


class PaletteResolver:
    """
    Builds a NodePalette from a region and a color table.

    Unmatched node names are reported in ``diagnostics``; ``missing`` keeps
    every referenced name that had no color definition.
    """

    def __init__(self, empty_node_name: str = AIR):
        self.empty_node_name = empty_node_name
        self.diagnostics: List[UnresolvedNameNotice] = []
        self.missing: List[str] = []
        self.full_miss = False

    def resolve(self, source: Union[Region, List[str]], table: ColorTable) -> NodePalette:
        """
        Resolve the palette.

        Args:
            source: Region, or the distinct node names it references
            table: Available color definitions

        Returns:
            NodePalette with the empty node type at index 0

        Raises:
            CapacityError: If more than 255 referenced names have colors
        """
        self.diagnostics = []
        names = source.unique_names() if isinstance(source, Region) else list(dict.fromkeys(source))
        referenced = set(names)

        # Keep table order, drop colors the region never uses
        colors = [color for color in table if color.name in referenced]
        if len(colors) > MAX_COLORS:
            raise CapacityError(len(colors), MAX_COLORS)

        self.missing = [name for name in names if name not in table]
        self.full_miss = not colors
        fallback_name = colors[FALLBACK_INDEX].name if len(colors) > FALLBACK_INDEX else None
        self._report_missing(names, fallback_name)

        palette = NodePalette(colors)
        self._ensure_empty(palette)
        self._reserve_empty(palette)

        return palette

    def _ensure_empty(self, palette: NodePalette):
        if self.empty_node_name not in palette.indices:
            palette.colors.append(ColorDefinition(self.empty_node_name, 0, 0, 0, 0))
            palette.indices[self.empty_node_name] = len(palette.colors) - 1

    def _reserve_empty(self, palette: NodePalette):
        """Swap the empty entry with whatever occupies index 0."""
        empty_index = palette.indices[self.empty_node_name]
        empty_color = palette.colors[empty_index]
        replaced = palette.colors[EMPTY_INDEX]

        palette.indices[replaced.name] = empty_index
        palette.indices[self.empty_node_name] = EMPTY_INDEX

        palette.colors[EMPTY_INDEX] = empty_color
        palette.colors[empty_index] = replaced

    def _report_missing(self, names: List[str], fallback_name: Optional[str]):
        if self.full_miss:
            for name in names:
                if name not in (AIR, IGNORE):
                    self._notice(name, UnresolvedReason.NO_MATCH, FALLBACK_INDEX)
            return

        for name in self.missing:
            if name == AIR:
                self._notice(name, UnresolvedReason.AIR, EMPTY_INDEX)
            elif name == IGNORE:
                self._notice(name, UnresolvedReason.IGNORE, EMPTY_INDEX)
            else:
                self._notice(name, UnresolvedReason.NO_MATCH, FALLBACK_INDEX,
                             fallback_name)

    def _notice(self, name: str, reason: UnresolvedReason, index: int,
                fallback_name: Optional[str] = None):
        self.diagnostics.append(UnresolvedNameNotice(name, reason, index, fallback_name))
