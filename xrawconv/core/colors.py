"""
Color Definitions
=================

Parses the node color table. Each non-comment line has the form::

    NodeName R G B [A]

Fields are separated by single spaces and alpha defaults to 255.
"""

from typing import Dict, Iterable, Iterator, List, Tuple
from dataclasses import dataclass

from xrawconv.core.errors import FormatError, MalformedLineWarning


@dataclass(frozen=True)
class ColorDefinition:
    """Color assigned to a node type."""
    name: str
    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 255

    def to_tuple(self) -> Tuple[int, int, int, int]:
        """Return color as RGBA tuple."""
        return (self.r, self.g, self.b, self.a)


class ColorTable:
    """
    Ordered mapping of node name to ColorDefinition.

    Redefining a name replaces its color but keeps the position of the first
    definition.
    """

    def __init__(self, colors: Iterable[ColorDefinition] = ()):
        self._colors: Dict[str, ColorDefinition] = {}
        for color in colors:
            self.add(color)

    def add(self, color: ColorDefinition):
        self._colors[color.name] = color

    def names(self) -> List[str]:
        return list(self._colors)

    def __contains__(self, name: str) -> bool:
        return name in self._colors

    def __getitem__(self, name: str) -> ColorDefinition:
        return self._colors[name]

    def __iter__(self) -> Iterator[ColorDefinition]:
        return iter(self._colors.values())

    def __len__(self) -> int:
        return len(self._colors)


class ColorTableParser:
    """
    Parser for color definition text.

    A bad line never aborts the parse: wrong field counts and bad channel
    values are recorded in ``diagnostics`` and the line is skipped.
    """

    SOURCE = "colors"
    COMMENT = "#"
    DELIMITER = " "

    def __init__(self):
        self.diagnostics: List[MalformedLineWarning] = []

    def parse(self, text: str) -> ColorTable:
        """
        Parse color definitions.

        Args:
            text: Full color table text

        Returns:
            ColorTable with the last definition of each name
        """
        table = ColorTable()

        for number, line in enumerate(text.splitlines(), 1):
            if line.startswith(self.COMMENT) or not line.strip():
                continue

            values = line.split(self.DELIMITER)
            if len(values) not in (4, 5):
                self._warn(number, f'Color definition line "{line}" is ill-formatted '
                                   f'(`NodeName R G B (A)`); Skip.')
                continue

            try:
                table.add(self.parse_values(values))
            except FormatError as e:
                self._warn(number, f"{e}; Skip.")

        return table

    @classmethod
    def parse_values(cls, values: List[str]) -> ColorDefinition:
        """
        Build a ColorDefinition from split line fields.

        Raises:
            FormatError: If a channel is not an integer in 0-255
        """
        name = values[0]
        channels = [cls._parse_channel(value) for value in values[1:]]
        if len(channels) == 3:
            channels.append(255)
        r, g, b, a = channels
        return ColorDefinition(name, r, g, b, a)

    @staticmethod
    def _parse_channel(value: str) -> int:
        if not (value.isascii() and value.isdigit()):
            raise FormatError(f"color channel is not an integer: {value!r}")
        channel = int(value)
        if not 0 <= channel <= 255:
            raise FormatError(f"color channel out of range 0-255: {channel}")
        return channel

    def _warn(self, line_number: int, message: str):
        self.diagnostics.append(MalformedLineWarning(self.SOURCE, line_number, message))

