"""Cross-file usage resolution for declarations."""

from .dependencies import DependencyResolver, UsageIndex

__all__ = ["DependencyResolver", "UsageIndex"]
