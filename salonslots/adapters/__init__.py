"""
Adapters layer - Reading data snapshots from outside the core.
"""

from .snapshot_loader import SnapshotLoader, snapshot_from_dict

__all__ = ["SnapshotLoader", "snapshot_from_dict"]
