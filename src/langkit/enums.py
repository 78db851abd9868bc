"""Enumerations for langkit type-safe constants.

Uses StrEnum for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class FileEventKind(StrEnum):
    """Kind of filesystem change reported by the watcher.

    StrEnum provides automatic string conversion: str(FileEventKind.ADDED) == "added"
    """

    CHANGED = "changed"
    """Existing file content or metadata changed"""

    ADDED = "added"
    """New file appeared in the watched directory"""

    REMOVED = "removed"
    """File disappeared from the watched directory"""


class RebuildState(StrEnum):
    """State of the coalescing rebuild scheduler.

    StrEnum provides automatic string conversion: str(RebuildState.IDLE) == "idle"
    """

    IDLE = "idle"
    """No compile in flight"""

    RUNNING = "running"
    """A compile is in flight and no further request has arrived"""

    RUNNING_WITH_PENDING = "running_with_pending"
    """A compile is in flight and exactly one rerun is scheduled after it"""


class PropertyKind(StrEnum):
    """Update semantics of a generated object property.

    StrEnum provides automatic string conversion: str(PropertyKind.REACTIVE) == "reactive"
    """

    STATIC = "static"
    """Plain value property holding a nested structure"""

    REACTIVE = "reactive"
    """Accessor property recomputed when the active locale changes"""


__all__ = [
    "FileEventKind",
    "PropertyKind",
    "RebuildState",
]
