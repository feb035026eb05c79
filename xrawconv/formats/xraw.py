"""
XRAW File Format Handler
========================

Writer (and a reader for verification) for the XRAW voxel format as used
here: 8-bit palette indices with a 256-entry RGBA palette.

XRAW Layout:
- 4 bytes: magic 'XRAW'
- 4 bytes: color channel data type (0 = unsigned integer), channel count (4),
  bits per channel (8), bits per index (8)
- 4 x int32: width, height, depth, palette size (always 256)
- width * height * depth bytes: voxel buffer of palette indices
- 256 x 4 bytes: RGBA palette
- All integers are little-endian
"""

import struct
import numpy as np
from typing import Tuple, BinaryIO, Union
from dataclasses import dataclass
from pathlib import Path

from xrawconv.core.errors import FormatError
from xrawconv.core.palette import NodePalette, PALETTE_SIZE
from xrawconv.core.region import Region


@dataclass
class XrawDocument:
    """Decoded XRAW contents."""
    size: Tuple[int, int, int]
    voxels: np.ndarray  # uint8 palette indices, in file order
    palette: np.ndarray  # (palette_size, 4) uint8 RGBA
    channel_type: int = 0
    channel_count: int = 4
    bits_per_channel: int = 8
    bits_per_index: int = 8

    @property
    def palette_size(self) -> int:
        return len(self.palette)


class XrawFormat:
    """
    XRAW encoder/decoder.

    Only the unsigned 8-bit RGBA, 8-bit index variant is produced.
    """

    MAGIC = b'XRAW'
    # unsigned, RGBA, 8 bits per channel, 8 bits per index
    COLOR_META = (0, 4, 8, 8)
    HEADER = struct.Struct('<4s4B4i')

    @classmethod
    def encode(cls, region: Region, palette: NodePalette) -> bytes:
        """
        Encode a region to XRAW bytes.

        Args:
            region: Parsed region; its nodes become the voxel buffer in order
            palette: Resolved palette used to index node names

        Returns:
            Complete XRAW byte stream
        """
        header = cls.HEADER.pack(cls.MAGIC, *cls.COLOR_META,
                                 region.size_x, region.size_y, region.size_z,
                                 PALETTE_SIZE)

        voxels = np.fromiter((palette.index_of(node.name) for node in region.nodes),
                             dtype=np.uint8, count=len(region.nodes))

        return header + voxels.tobytes() + palette.get_rgba_array().tobytes()

    @classmethod
    def write(cls, stream: BinaryIO, region: Region, palette: NodePalette):
        """Encode and write to an open binary stream, then flush it."""
        stream.write(cls.encode(region, palette))
        stream.flush()

    @classmethod
    def save(cls, filepath: Union[str, Path], region: Region, palette: NodePalette):
        """
        Save a region to an XRAW file.

        The stream is encoded before the file is opened, so a failure during
        encoding leaves no file behind.
        """
        data = cls.encode(region, palette)
        with open(filepath, 'wb') as f:
            f.write(data)
            f.flush()

    @classmethod
    def decode(cls, data: bytes) -> XrawDocument:
        """
        Decode XRAW bytes.

        Raises:
            FormatError: On a bad magic number, unsupported channel layout or
                truncated data
        """
        if len(data) < cls.HEADER.size:
            raise FormatError(f"XRAW data too short for header: {len(data)} bytes")

        magic, channel_type, channel_count, bits, index_bits, sx, sy, sz, palette_size = \
            cls.HEADER.unpack_from(data)
        if magic != cls.MAGIC:
            raise FormatError(f"Invalid XRAW file: expected {cls.MAGIC!r}, got {magic!r}")
        if (channel_type, channel_count, bits, index_bits) != cls.COLOR_META:
            raise FormatError(
                f"Unsupported XRAW color layout: {(channel_type, channel_count, bits, index_bits)}")
        if min(sx, sy, sz, palette_size) < 0:
            raise FormatError(f"Invalid XRAW dimensions: {(sx, sy, sz)}, palette {palette_size}")

        # The voxel buffer holds one byte per exported node, which need not
        # match the header volume, so it spans everything before the palette.
        palette_start = len(data) - palette_size * channel_count
        if palette_start < cls.HEADER.size:
            raise FormatError(f"XRAW data truncated: {len(data)} bytes cannot hold "
                              f"a {palette_size}-entry palette")

        voxels = np.frombuffer(data[cls.HEADER.size:palette_start], dtype=np.uint8)
        palette = np.frombuffer(data[palette_start:], dtype=np.uint8).reshape(
            palette_size, channel_count)

        return XrawDocument(
            size=(sx, sy, sz),
            voxels=voxels,
            palette=palette,
            channel_type=channel_type,
            channel_count=channel_count,
            bits_per_channel=bits,
            bits_per_index=index_bits,
        )

    @classmethod
    def load(cls, filepath: Union[str, Path]) -> XrawDocument:
        """Load and decode an XRAW file."""
        with open(filepath, 'rb') as f:
            return cls.decode(f.read())
