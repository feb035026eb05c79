"""
Region - Exported Voxel Region
==============================

Data structures and parser for the plain-text region export.

The export is a fixed four-line header followed by one entry per voxel::

    SizeX: 2
    SizeY: 1
    SizeZ: 1
    Nodes:
    - Name: air
    - Name: default:stone

Only this narrow subset is accepted; the format is not read as YAML.
"""

from typing import Iterable, List, Tuple
from dataclasses import dataclass

from xrawconv.core.errors import FormatError, MalformedLineWarning


@dataclass(frozen=True)
class Node:
    """A single voxel entry."""
    name: str


@dataclass(frozen=True)
class Region:
    """
    Parsed voxel region.

    Attributes:
        size_x, size_y, size_z: Grid extents as declared in the header
        nodes: Voxel entries in scan order
    """
    size_x: int = 0
    size_y: int = 0
    size_z: int = 0
    nodes: Tuple[Node, ...] = ()

    @property
    def size(self) -> Tuple[int, int, int]:
        """Return (x, y, z) dimensions."""
        return (self.size_x, self.size_y, self.size_z)

    @property
    def volume(self) -> int:
        """Number of voxels the header dimensions describe."""
        return self.size_x * self.size_y * self.size_z

    def unique_names(self) -> List[str]:
        """Distinct node names in order of first appearance."""
        return list(dict.fromkeys(node.name for node in self.nodes))

    def __len__(self) -> int:
        return len(self.nodes)


class RegionParser:
    """
    Parser for region exports.

    Missing header markers and entries without a name marker are recorded in
    ``diagnostics`` instead of aborting; unparsable sizes raise FormatError.
    """

    SOURCE = "region"
    SIZE_MARKERS = ("SizeX: ", "SizeY: ", "SizeZ: ")
    SIZE_LABELS = ("first", "second", "third")
    NODES_MARKER = "Nodes"
    NAME_MARKER = "- Name: "
    HEADER_LINES = 4
    MAX_SIZE = 2 ** 31 - 1

    def __init__(self):
        self.diagnostics: List[MalformedLineWarning] = []

    def parse(self, lines: Iterable[str]) -> Region:
        """
        Parse region lines.

        Args:
            lines: Source lines, with or without line terminators

        Returns:
            The parsed Region

        Raises:
            FormatError: If a size field is not a non-negative integer
        """
        lines = [line.rstrip("\r\n") for line in lines]
        sizes = [self._parse_size(lines, i) for i in range(len(self.SIZE_MARKERS))]

        if len(lines) < self.HEADER_LINES or not lines[3].startswith(self.NODES_MARKER):
            self._warn(4, f'The forth line of source file must be "{self.NODES_MARKER}".')

        nodes = []
        for number, line in enumerate(lines[self.HEADER_LINES:], self.HEADER_LINES + 1):
            if not line.strip():
                continue
            nodes.append(Node(self._parse_name(line, number)))

        return Region(sizes[0], sizes[1], sizes[2], tuple(nodes))

    def _parse_size(self, lines: List[str], index: int) -> int:
        marker = self.SIZE_MARKERS[index]
        if index >= len(lines) or not lines[index].startswith(marker):
            self._warn(index + 1, f'The {self.SIZE_LABELS[index]} line of source file '
                                  f'must be "{marker.rstrip(": ")}".')
            return 0

        text = lines[index][len(marker):]
        try:
            value = int(text)
        except ValueError:
            raise FormatError(f"{marker.rstrip(': ')} is not an integer: {text!r}", index + 1) from None
        if value < 0:
            raise FormatError(f"{marker.rstrip(': ')} must not be negative: {value}", index + 1)
        if value > self.MAX_SIZE:
            raise FormatError(f"{marker.rstrip(': ')} exceeds {self.MAX_SIZE}: {value}", index + 1)
        return value

    def _parse_name(self, line: str, number: int) -> str:
        position = line.find(self.NAME_MARKER)
        if position < 0:
            self._warn(number, f'Node entry has no "{self.NAME_MARKER.strip()}" marker; '
                               f'using the whole line as the node name.')
            return line.strip()
        return line[position + len(self.NAME_MARKER):].strip()

    def _warn(self, line_number: int, message: str):
        self.diagnostics.append(MalformedLineWarning(self.SOURCE, line_number, message))

