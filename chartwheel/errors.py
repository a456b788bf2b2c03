"""Exception hierarchy shared by the chartwheel modules."""

from __future__ import annotations

from typing import Iterable, List

__all__ = ["ChartwheelError", "SnapshotStructureError"]


class ChartwheelError(RuntimeError):
    """Base class for errors raised by chartwheel."""


class SnapshotStructureError(ChartwheelError):
    """Raised when a chart snapshot is structurally unusable.

    The wheel/ring collection must be an ordered sequence for any index or
    geometry to be derived. ``errors`` keeps one human-readable entry per
    failing location; the message joins them with ``"; "``.
    """

    def __init__(self, errors: Iterable[str]):
        self.errors: List[str] = list(errors) or ["invalid chart snapshot"]
        super().__init__("; ".join(self.errors))
