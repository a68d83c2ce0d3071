"""Retention module - cleanup of artifacts no submission references"""

from .orphan_sweep import OrphanSweeper, SweepReport

__all__ = ["OrphanSweeper", "SweepReport"]
