"""
stabilizer.py – Supermajority debounce over the raw per-frame gesture stream.

Per-frame classification flickers (a finger crosses its PIP threshold, a
hand blurs).  The stabilizer keeps the last ``window`` raw labels and
reports a label as *stable* once it holds at least ``min_votes`` of them and
differs from the last stable label it reported.  No-match frames (``None``)
take a slot in the window but are never reported.
"""

from __future__ import annotations

import collections
import logging
from typing import Hashable, Optional

logger = logging.getLogger(__name__)

# ── Constants ────────────────────────────────────────────────────────────────

STABILIZER_WINDOW = 10     # frames (~0.33 s @ 30 fps)
STABILIZER_MIN_VOTES = 7   # > 6 of 10


class TemporalStabilizer:
    """Sliding-window vote over raw labels.

    Parameters
    ----------
    window : int
        Number of most recent raw labels kept (FIFO).
    min_votes : int
        Occurrences of the newest label inside the window required to
        confirm it.
    """

    def __init__(
        self,
        window: int = STABILIZER_WINDOW,
        min_votes: int = STABILIZER_MIN_VOTES,
    ) -> None:
        if window < 1:
            raise ValueError(f"window must be positive, got {window}")
        if not 1 <= min_votes <= window:
            raise ValueError(f"min_votes must be in [1, {window}], got {min_votes}")
        self.window = window
        self.min_votes = min_votes
        self._buffer: collections.deque[Optional[Hashable]] = collections.deque(maxlen=window)
        self._stable: Optional[Hashable] = None

    @property
    def stable_label(self) -> Optional[Hashable]:
        """Last label reported as stable, or ``None`` before the first one."""
        return self._stable

    @property
    def buffer(self) -> tuple:
        return tuple(self._buffer)

    def __len__(self) -> int:
        return len(self._buffer)

    def reset(self) -> None:
        self._buffer.clear()
        self._stable = None

    def push(self, raw_label: Optional[Hashable]) -> Optional[Hashable]:
        """Feed one raw label; return it if this frame makes it newly stable.

        Returns ``None`` when no transition happens, including when the
        label is confirmed again after already being reported.
        """
        self._buffer.append(raw_label)
        if raw_label is None:
            return None

        votes = sum(1 for label in self._buffer if label == raw_label)
        if votes >= self.min_votes and raw_label != self._stable:
            logger.debug("stable label %r -> %r (%d/%d)", self._stable, raw_label, votes, len(self._buffer))
            self._stable = raw_label
            return raw_label
        return None
