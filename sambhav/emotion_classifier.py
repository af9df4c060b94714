"""
emotion_classifier.py – Coarse facial-expression heuristic on Face Mesh landmarks.

Only three states are reported, chosen for what matters in conversation:

* ``Urgent``  – mouth wide open *and* eyes wide (fear / surprise / alarm)
* ``Happy``   – both mouth corners lifted above the upper lip
* ``Neutral`` – everything else, and any face with too few landmarks

The thresholds are absolute values in normalised coordinates with no
per-user neutral-face baseline, so they drift with camera distance.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from sambhav.geometry import as_landmarks, distance_3d
from sambhav.labels import Emotion


# ── Constants ────────────────────────────────────────────────────────────────

MIN_FACE_LANDMARKS = 468

# Face Mesh indices
UPPER_LIP = 13
LOWER_LIP = 14
MOUTH_LEFT = 61
MOUTH_RIGHT = 291
LEFT_EYE_TOP, LEFT_EYE_BOTTOM = 159, 145
RIGHT_EYE_TOP, RIGHT_EYE_BOTTOM = 386, 374

MOUTH_OPEN_RATIO = 0.5   # lip gap / mouth width
EYES_WIDE_OPEN = 0.035   # mean lid gap


@dataclass(frozen=True)
class FaceMetrics:
    mouth_ratio: float
    eye_open: float
    corners_lifted: bool

    @classmethod
    def from_landmarks(cls, lm: np.ndarray) -> "FaceMetrics":
        mouth_height = distance_3d(lm[UPPER_LIP], lm[LOWER_LIP])
        mouth_width = distance_3d(lm[MOUTH_LEFT], lm[MOUTH_RIGHT])
        # Collapsed mouth (degenerate mesh) reads as closed
        mouth_ratio = mouth_height / mouth_width if mouth_width > 0 else 0.0

        eye_open = (
            distance_3d(lm[LEFT_EYE_TOP], lm[LEFT_EYE_BOTTOM])
            + distance_3d(lm[RIGHT_EYE_TOP], lm[RIGHT_EYE_BOTTOM])
        ) / 2

        upper_y = lm[UPPER_LIP, 1]
        corners_lifted = bool(lm[MOUTH_LEFT, 1] < upper_y and lm[MOUTH_RIGHT, 1] < upper_y)
        return cls(mouth_ratio=mouth_ratio, eye_open=eye_open, corners_lifted=corners_lifted)


class EmotionClassifier:
    """Stateless face-landmark emotion heuristic."""

    def __init__(
        self,
        mouth_open_ratio: float = MOUTH_OPEN_RATIO,
        eyes_wide_open: float = EYES_WIDE_OPEN,
    ) -> None:
        self.mouth_open_ratio = mouth_open_ratio
        self.eyes_wide_open = eyes_wide_open

    def metrics(self, face) -> FaceMetrics | None:
        landmarks = as_landmarks(face)
        if landmarks is None or landmarks.shape[0] < MIN_FACE_LANDMARKS:
            return None
        return FaceMetrics.from_landmarks(landmarks)

    def classify(self, face) -> Emotion:
        m = self.metrics(face)
        if m is None:
            return Emotion.NEUTRAL

        # Alarm takes precedence over a smile
        if m.mouth_ratio > self.mouth_open_ratio and m.eye_open > self.eyes_wide_open:
            return Emotion.URGENT
        if m.corners_lifted:
            return Emotion.HAPPY
        return Emotion.NEUTRAL


_DEFAULT = EmotionClassifier()


def classify_emotion(face) -> Emotion:
    return _DEFAULT.classify(face)
