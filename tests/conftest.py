"""
Synthetic MediaPipe-style landmarks for the classifier and pipeline tests.

Hands are 21x3 arrays in normalised image space (y grows downwards) with
each finger placed clearly extended or clearly curled relative to the
wrist; faces are 468x3 arrays where only the lip, mouth-corner and eyelid
indices used by the emotion heuristic are positioned.
"""

import numpy as np
import pytest

WRIST = (0.50, 0.90)
MIDDLE_MCP = (0.48, 0.70)

# finger -> (MCP, PIP, DIP, TIP) indices and column x
_FINGERS = {
    "index": ((5, 6, 7, 8), 0.42),
    "middle": ((9, 10, 11, 12), 0.48),
    "ring": ((13, 14, 15, 16), 0.54),
    "pinky": ((17, 18, 19, 20), 0.60),
}

# thumb pose -> (CMC, MCP, IP, TIP) positions
_THUMBS = {
    # tucked across the palm, tip below the IP joint
    "closed": [(0.44, 0.86), (0.42, 0.80), (0.44, 0.70), (0.47, 0.73)],
    # tucked but tip raised above the IP joint
    "tucked_up": [(0.44, 0.86), (0.42, 0.80), (0.44, 0.74), (0.47, 0.71)],
    # sticking out sideways
    "out": [(0.42, 0.86), (0.35, 0.82), (0.30, 0.78), (0.24, 0.80)],
    # pointing up (thumbs-up)
    "up": [(0.42, 0.86), (0.38, 0.75), (0.38, 0.60), (0.38, 0.50)],
    # tip resting on a curled index tip (OK ring)
    "ok": [(0.42, 0.86), (0.38, 0.80), (0.36, 0.72), (0.41, 0.67)],
}


def build_hand(thumb="closed", index=False, middle=False, ring=False, pinky=False, ok=False):
    lm = np.zeros((21, 3), dtype=np.float32)
    lm[0, :2] = WRIST
    for i, pos in enumerate(_THUMBS["ok" if ok else thumb], start=1):
        lm[i, :2] = pos

    extended = {"index": index, "middle": middle, "ring": ring, "pinky": pinky}
    for name, ((mcp, pip, dip, tip), x) in _FINGERS.items():
        lm[mcp, :2] = (x, 0.70)
        lm[pip, :2] = (x, 0.60)
        if extended[name]:
            lm[dip, :2] = (x, 0.50)
            lm[tip, :2] = (x, 0.40)
        else:
            lm[dip, :2] = (x, 0.65)
            lm[tip, :2] = (x, 0.72)

    if ok:
        lm[8, :2] = (0.40, 0.66)  # curled index tip meeting the thumb
    return lm


def build_face(mouth_open=False, eyes_wide=False, smile=False, n_points=468):
    lm = np.zeros((n_points, 3), dtype=np.float32)
    upper_y = 0.70
    lm[13] = (0.50, upper_y, 0.0)
    lm[14] = (0.50, upper_y + (0.06 if mouth_open else 0.01), 0.0)

    corner_y = 0.68 if smile else 0.705
    lm[61] = (0.45, corner_y, 0.0)
    lm[291] = (0.55, corner_y, 0.0)

    lid = 0.05 if eyes_wide else 0.02
    lm[159] = (0.40, 0.40, 0.0)
    lm[145] = (0.40, 0.40 + lid, 0.0)
    lm[386] = (0.60, 0.40, 0.0)
    lm[374] = (0.60, 0.40 + lid, 0.0)
    return lm


@pytest.fixture
def make_hand():
    return build_hand


@pytest.fixture
def make_face():
    return build_face


@pytest.fixture
def open_palm():
    return build_hand(thumb="out", index=True, middle=True, ring=True, pinky=True)


@pytest.fixture
def fist():
    return build_hand(thumb="closed")
