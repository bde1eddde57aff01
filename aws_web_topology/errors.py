"""Error hierarchy and exit codes for the topology exporter."""
from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    OK = 0
    CONFIG_ERROR = 2
    DIAGRAM_ERROR = 3
    AWS_ERROR = 4
    RUNTIME_ERROR = 5


class TopologyError(Exception):
    """Base error for the topology exporter."""


class DiagramError(TopologyError):
    """Raised when a diagram model cannot be built."""


class InvalidNameError(DiagramError, ValueError):
    """Raised for empty, duplicate or delimiter-containing resource names."""


class UnknownTargetError(DiagramError, LookupError):
    """Raised when a reference names a node the builder never issued."""


class UnknownKindError(DiagramError, ValueError):
    """Raised when a resource kind has no style mapping."""


class DiscoveryError(TopologyError):
    """Raised when live AWS lookups fail."""


class ExportError(TopologyError):
    """Raised when an export artifact cannot be produced."""


def as_exit_code(exc: BaseException) -> int:
    if isinstance(exc, DiagramError):
        return int(ExitCode.DIAGRAM_ERROR)
    if isinstance(exc, DiscoveryError):
        return int(ExitCode.AWS_ERROR)
    if isinstance(exc, (ExportError, TopologyError, OSError)):
        return int(ExitCode.RUNTIME_ERROR)
    if isinstance(exc, ValueError):
        return int(ExitCode.CONFIG_ERROR)
    return 1


__all__ = [
    "DiagramError",
    "DiscoveryError",
    "ExitCode",
    "ExportError",
    "InvalidNameError",
    "TopologyError",
    "UnknownKindError",
    "UnknownTargetError",
    "as_exit_code",
]
