"""Errors raised at the edges of recordpool.

The reducer itself never raises; these cover setup mistakes only.
"""

from __future__ import annotations


class RecordPoolError(Exception):
    """Root of every error this package raises."""


class RecordPoolConfigError(RecordPoolError):
    """A ``PoolConfig`` value or ``RECORDPOOL_*`` variable is unusable.

    ``setting`` names the offending field or environment variable.
    """

    def __init__(self, message: str, *, setting: str = "") -> None:
        self.setting = setting
        super().__init__(message)
