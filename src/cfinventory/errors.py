"""Exception types raised by the inventory engine."""


class InventoryError(Exception):
    """Base class for all inventory errors."""


class InvalidRootError(InventoryError, ValueError):
    """The analysis root does not exist or is not a directory."""


class ContentUnavailableError(InventoryError, OSError):
    """A file's bytes could not be read at all (permissions, vanished file)."""


class AnalysisCancelledError(InventoryError):
    """Raised by the pipeline when a run was cancelled before completion."""
