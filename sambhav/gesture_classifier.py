"""
gesture_classifier.py – Map one hand's 21 landmarks to a sign label.

Rule-based, no training.  A frame is first reduced to a :class:`HandPose`
(five extended/curled finger flags plus two thumb measurements), then
checked against :data:`GESTURE_RULES` in order; the first matching rule
wins.  The order is part of the contract: e.g. a closed fist with the
thumb tip above its IP joint is ``Good``, never ``Help``.

Landmark numbering follows MediaPipe Hands::

    0 wrist
    1-4   thumb  (CMC, MCP, IP, TIP)
    5-8   index  (MCP, PIP, DIP, TIP)
    9-12  middle
    13-16 ring
    17-20 pinky
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from sambhav.geometry import as_landmarks, distance_2d
from sambhav.labels import Gesture

# ── Constants ────────────────────────────────────────────────────────────────

NUM_HAND_JOINTS = 21
WRIST_IDX = 0
THUMB_IP_IDX = 3
THUMB_TIP_IDX = 4
INDEX_TIP_IDX = 8
MIDDLE_MCP_IDX = 9

# (tip, PIP) pairs for index, middle, ring, pinky
FINGER_JOINTS: list[tuple[int, int]] = [(8, 6), (12, 10), (16, 14), (20, 18)]

# Normalised image units
THUMB_EXTENDED_DIST = 0.05  # thumb tip ↔ middle knuckle
OK_TOUCH_DIST = 0.05        # thumb tip ↔ index tip ("OK" ring)


# ── Pose features ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class HandPose:
    """Per-frame finger state extracted from a hand."""

    thumb: bool
    index: bool
    middle: bool
    ring: bool
    pinky: bool
    thumb_tip_above_ip: bool
    thumb_index_gap: float

    @property
    def extended(self) -> tuple[bool, bool, bool, bool, bool]:
        """``(thumb, index, middle, ring, pinky)``."""
        return (self.thumb, self.index, self.middle, self.ring, self.pinky)

    @classmethod
    def from_landmarks(cls, landmarks: np.ndarray) -> "HandPose":
        wrist = landmarks[WRIST_IDX]
        fingers = [
            distance_2d(landmarks[tip], wrist) > distance_2d(landmarks[pip], wrist)
            for tip, pip in FINGER_JOINTS
        ]
        thumb = (
            distance_2d(landmarks[THUMB_TIP_IDX], landmarks[MIDDLE_MCP_IDX])
            > THUMB_EXTENDED_DIST
        )
        return cls(
            thumb=thumb,
            index=fingers[0],
            middle=fingers[1],
            ring=fingers[2],
            pinky=fingers[3],
            # y grows downwards in image space
            thumb_tip_above_ip=bool(landmarks[THUMB_TIP_IDX, 1] < landmarks[THUMB_IP_IDX, 1]),
            thumb_index_gap=distance_2d(landmarks[THUMB_TIP_IDX], landmarks[INDEX_TIP_IDX]),
        )


# ── Decision table ───────────────────────────────────────────────────────────
# Each rule is a finger pattern (thumb, index, middle, ring, pinky) where
# 1 = extended, 0 = curled, None = don't care, plus an optional extra check
# on the pose.  Rules are evaluated top to bottom.

Pattern = tuple[Optional[int], Optional[int], Optional[int], Optional[int], Optional[int]]


@dataclass(frozen=True)
class GestureRule:
    label: Gesture
    pattern: Pattern
    check: Callable[[HandPose], bool] | None = None

    def matches(self, pose: HandPose) -> bool:
        for want, have in zip(self.pattern, pose.extended):
            if want is not None and bool(want) != have:
                return False
        return self.check is None or self.check(pose)


def _thumb_points_up(pose: HandPose) -> bool:
    return pose.thumb_tip_above_ip


def _thumb_touches_index(pose: HandPose) -> bool:
    return pose.thumb_index_gap < OK_TOUCH_DIST


GESTURE_RULES: list[GestureRule] = [
    GestureRule(Gesture.HELLO, (1, 1, 1, 1, 1)),                          # open palm
    GestureRule(Gesture.VICTORY, (0, 1, 1, 0, 0)),                        # V sign
    GestureRule(Gesture.GOOD, (None, 0, 0, 0, 0), _thumb_points_up),      # thumbs up
    GestureRule(Gesture.LOVE, (1, 1, 0, 0, 1)),                           # ILY
    GestureRule(Gesture.LOOK, (0, 1, 0, 0, 0)),                           # pointing
    GestureRule(Gesture.HELP, (0, 0, 0, 0, 0)),                           # fist
    GestureRule(Gesture.CALL, (1, 0, 0, 0, 1)),                           # call me
    GestureRule(Gesture.THANKS, (None, None, 1, 1, 1), _thumb_touches_index),  # OK
]


def match_rules(pose: HandPose, rules: list[GestureRule] = GESTURE_RULES) -> Gesture | None:
    """Return the label of the first rule *pose* satisfies, else ``None``."""
    for rule in rules:
        if rule.matches(pose):
            return rule.label
    return None


# ── Classifier ───────────────────────────────────────────────────────────────


class GestureClassifier:
    """Stateless hand-sign classifier.

    Parameters
    ----------
    rules : list of GestureRule
        Ordered decision table; defaults to :data:`GESTURE_RULES`.
    """

    def __init__(self, rules: list[GestureRule] | None = None) -> None:
        self.rules = list(rules) if rules is not None else list(GESTURE_RULES)

    def pose(self, hand) -> HandPose | None:
        landmarks = as_landmarks(hand)
        if landmarks is None or landmarks.shape[0] != NUM_HAND_JOINTS:
            return None
        return HandPose.from_landmarks(landmarks)

    def classify(self, hand) -> Gesture | None:
        """Classify a single hand.

        Parameters
        ----------
        hand : array-like
            ``(21, 2)`` or ``(21, 3)`` normalised landmarks, or a list of
            :class:`~sambhav.geometry.Point3`.

        Returns
        -------
        Gesture or None
            The matched sign, or ``None`` when nothing matches or the frame
            does not hold exactly 21 points.
        """
        pose = self.pose(hand)
        if pose is None:
            return None
        return match_rules(pose, self.rules)


_DEFAULT = GestureClassifier()


def classify_gesture(hand) -> Gesture | None:
    return _DEFAULT.classify(hand)
