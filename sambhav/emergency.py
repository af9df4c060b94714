"""
emergency.py – Sustained "Help" gesture latch.

A fist held for more than ``hold_frames`` consecutive hand frames raises
the session emergency flag.  The flag is a latch: once set it stays set
whatever the hand does next, and only :meth:`EmergencyDetector.acknowledge`
(the user dismissing the alert) clears it.

The hold is counted in frames, not seconds; use :func:`hold_frames_for_fps`
when the camera does not deliver ~30 frames/s.
"""

from __future__ import annotations

import logging
from typing import Hashable, Iterable, Optional

from sambhav.labels import Gesture

logger = logging.getLogger(__name__)

# ── Constants ────────────────────────────────────────────────────────────────

NOMINAL_FPS = 30
EMERGENCY_HOLD_SECONDS = 2.0
EMERGENCY_HOLD_FRAMES = 60  # ~2 s @ 30 fps; latch fires on the 61st frame

EMERGENCY_TRIGGERS: frozenset = frozenset({Gesture.HELP})


def hold_frames_for_fps(fps: float, seconds: float = EMERGENCY_HOLD_SECONDS) -> int:
    """Frame count equivalent to holding for *seconds* at *fps*."""
    if fps <= 0:
        raise ValueError(f"fps must be positive, got {fps}")
    return max(1, int(round(fps * seconds)))


class EmergencyDetector:
    """Hold counter plus one-way ``active`` flag."""

    def __init__(
        self,
        hold_frames: int = EMERGENCY_HOLD_FRAMES,
        triggers: Iterable[Hashable] = EMERGENCY_TRIGGERS,
    ) -> None:
        self.hold_frames = hold_frames
        self.triggers = frozenset(triggers)
        self._counter = 0
        self._active = False

    @property
    def counter(self) -> int:
        return self._counter

    @property
    def active(self) -> bool:
        return self._active

    def update(self, raw_label: Optional[Hashable]) -> bool:
        """Account for one hand frame's raw label.

        Returns ``True`` only on the frame where the latch goes from clear
        to set.
        """
        if raw_label is not None and raw_label in self.triggers:
            self._counter += 1
        else:
            self._counter = 0

        if self._counter > self.hold_frames and not self._active:
            self._active = True
            logger.info("Emergency latched after %d consecutive frames", self._counter)
            return True
        return False

    def acknowledge(self) -> None:
        """Clear the latch (user dismissal) and restart the hold count."""
        if self._active:
            logger.info("Emergency acknowledged")
        self._active = False
        self._counter = 0

    def reset(self) -> None:
        self._active = False
        self._counter = 0
