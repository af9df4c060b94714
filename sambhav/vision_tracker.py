"""
vision_tracker.py – MediaPipe Hands + Face Mesh wrapper.

Turns BGR webcam frames into the landmark arrays the pipeline consumes:

* hands: list of ``(21, 3)`` float32 arrays, normalised ``(x, y, z)``
* face:  one ``(468+, 3)`` float32 array, or ``None``

Both models run on the same RGB conversion of each frame.  ``mediapipe`` is
imported when a tracker is built so the pure pipeline never needs it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import cv2
import numpy as np

from sambhav.gesture_classifier import NUM_HAND_JOINTS, WRIST_IDX


# ── Constants ────────────────────────────────────────────────────────────────

MAX_HANDS = 2

# 21-point hand skeleton connectivity (MediaPipe convention)
HAND_CONNECTIONS: list[tuple[int, int]] = [
    (0, 1), (1, 2), (2, 3), (3, 4),        # thumb
    (5, 6), (6, 7), (7, 8),                 # index
    (9, 10), (10, 11), (11, 12),            # middle
    (13, 14), (14, 15), (15, 16),           # ring
    (17, 18), (18, 19), (19, 20),           # pinky
    (0, 5), (5, 9), (9, 13), (13, 17),      # palm
    (0, 17),
]

# Colours (BGR) for drawing
_HAND_COLOURS = [(246, 92, 139), (191, 212, 45)]  # violet, teal
_POINT_COLOUR = (191, 212, 45)


@dataclass
class TrackedFrame:
    hands: list[np.ndarray] = field(default_factory=list)
    face: np.ndarray | None = None


def landmarks_to_array(landmark_list) -> np.ndarray:
    """Convert a MediaPipe ``NormalizedLandmarkList`` to an ``(N, 3)`` array."""
    return np.array(
        [(lm.x, lm.y, lm.z) for lm in landmark_list.landmark],
        dtype=np.float32,
    )


class HandFaceTracker:
    """Detect up to two hands and one face per frame.

    Parameters
    ----------
    hand_confidence : float
        Minimum detection / tracking confidence for the hand model.
    face_confidence : float
        Minimum detection / tracking confidence for the face mesh.
    track_face : bool
        Disable to skip the face mesh (emotion stays ``Neutral``).
    """

    def __init__(
        self,
        hand_confidence: float = 0.6,
        face_confidence: float = 0.5,
        track_face: bool = True,
    ) -> None:
        import mediapipe as mp

        self._hands = mp.solutions.hands.Hands(
            static_image_mode=False,
            max_num_hands=MAX_HANDS,
            model_complexity=1,
            min_detection_confidence=hand_confidence,
            min_tracking_confidence=hand_confidence,
        )
        self._face = None
        if track_face:
            self._face = mp.solutions.face_mesh.FaceMesh(
                max_num_faces=1,
                refine_landmarks=True,
                min_detection_confidence=face_confidence,
                min_tracking_confidence=face_confidence,
            )

    @property
    def mode(self) -> str:
        return "mediapipe hands+face" if self._face is not None else "mediapipe hands"

    def track(self, bgr_frame: np.ndarray) -> TrackedFrame:
        rgb = cv2.cvtColor(bgr_frame, cv2.COLOR_BGR2RGB)
        rgb.flags.writeable = False

        result = TrackedFrame()
        hand_res = self._hands.process(rgb)
        for hand_lms in hand_res.multi_hand_landmarks or []:
            arr = landmarks_to_array(hand_lms)
            if arr.shape[0] == NUM_HAND_JOINTS:
                result.hands.append(arr)

        if self._face is not None:
            face_res = self._face.process(rgb)
            if face_res.multi_face_landmarks:
                result.face = landmarks_to_array(face_res.multi_face_landmarks[0])

        return result

    def close(self) -> None:
        self._hands.close()
        if self._face is not None:
            self._face.close()

    def __enter__(self) -> "HandFaceTracker":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


# ── Drawing utilities ────────────────────────────────────────────────────────


def draw_hands(
    bgr_frame: np.ndarray,
    hands: list[np.ndarray],
    labels: list[str | None] | None = None,
    point_radius: int = 4,
    line_thickness: int = 3,
) -> np.ndarray:
    """Draw hand skeletons (and raw labels) onto *bgr_frame* (mutates in-place)."""
    h, w = bgr_frame.shape[:2]

    for i, landmarks in enumerate(hands):
        colour = _HAND_COLOURS[i % len(_HAND_COLOURS)]
        pts = [(int(x), int(y)) for x, y in landmarks[:, :2] * [w, h]]

        for a, b in HAND_CONNECTIONS:
            cv2.line(bgr_frame, pts[a], pts[b], colour, line_thickness)

        for pt in pts:
            cv2.circle(bgr_frame, pt, point_radius, _POINT_COLOUR, -1)

        label = labels[i] if labels and i < len(labels) else None
        if label:
            wrist = pts[WRIST_IDX]
            cv2.putText(
                bgr_frame, label,
                (wrist[0] + 5, wrist[1] - 10),
                cv2.FONT_HERSHEY_SIMPLEX, 0.5, colour, 1, cv2.LINE_AA,
            )

    return bgr_frame
