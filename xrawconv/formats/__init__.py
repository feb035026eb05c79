"""
xrawconv Formats Module
=======================

Binary voxel file formats written by the converter.
"""

from xrawconv.formats.xraw import XrawFormat, XrawDocument

__all__ = ['XrawFormat', 'XrawDocument']
