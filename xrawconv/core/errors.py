"""
Errors and Diagnostics
======================

Fatal conditions are raised as exceptions; recoverable ones are collected
as diagnostic records so callers can inspect them after a run.
"""

from enum import Enum, IntEnum
from typing import Optional
from dataclasses import dataclass


class ExitCode(IntEnum):
    """Process result codes reported by the command line tool."""
    SUCCESS = 0
    INSUFFICIENT_ARGUMENTS = 1
    TOO_MANY_COLORS = 2
    INVALID_FORMAT = 3
    FILE_NOT_FOUND = 4


class ConversionError(Exception):
    """Base class for errors that abort a conversion run."""
    exit_code = ExitCode.INVALID_FORMAT


class FormatError(ConversionError, ValueError):
    """A numeric field (size or color channel) could not be parsed."""
    exit_code = ExitCode.INVALID_FORMAT

    def __init__(self, message: str, line_number: Optional[int] = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class CapacityError(ConversionError):
    """More referenced colors than an 8-bit palette can index."""
    exit_code = ExitCode.TOO_MANY_COLORS

    def __init__(self, count: int, limit: int):
        super().__init__(f"More than {limit} colors are used ({count} referenced)")
        self.count = count
        self.limit = limit


class UnresolvedReason(Enum):
    """Why a referenced node name has no color of its own."""
    AIR = "air"
    IGNORE = "ignore"
    NO_MATCH = "no-match"


@dataclass(frozen=True)
class MalformedLineWarning:
    """A skipped or defaulted line in one of the text inputs."""
    source: str  # "region" or "colors"
    line_number: int  # 1-based
    message: str

    def __str__(self) -> str:
        return f"{self.source}:{self.line_number}: {self.message}"


@dataclass(frozen=True)
class UnresolvedNameNotice:
    """A node name that falls back to another palette index."""
    name: str
    reason: UnresolvedReason
    fallback_index: int
    fallback_name: Optional[str] = None

    def __str__(self) -> str:
        if self.reason is UnresolvedReason.AIR:
            return (f'Node type "{self.name}" is not defined in color file - but it\'s '
                    f'also not needed; Will treat as empty (color index {self.fallback_index}).')
        if self.reason is UnresolvedReason.IGNORE:
            return (f'Exported region contains node type "{self.name}"; '
                    f'Will treat as empty (color index {self.fallback_index}).')
        if self.fallback_name is not None:
            return (f'Node type "{self.name}" is not defined in color file; '
                    f'Will use `{self.fallback_name}` instead (color index {self.fallback_index}).')
        return (f'Node type "{self.name}" is not defined in color file; '
                f'Will use color index value {self.fallback_index} instead.')
