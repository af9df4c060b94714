"""
labels.py – Closed label sets shared across the pipeline.

Every label is a ``str``-valued enum so it compares equal to its plain text
(``Gesture.HELLO == "Hello"``) and can key the phrase tables directly.
Use :func:`label_text` when rendering; ``str()`` of an enum member is its
qualified name, not its value.
"""

from __future__ import annotations

from enum import Enum


class Gesture(str, Enum):
    HELLO = "Hello"
    VICTORY = "Victory"
    GOOD = "Good"
    LOVE = "Love"
    LOOK = "Look"
    HELP = "Help"
    CALL = "Call"
    THANKS = "Thanks"


class Emotion(str, Enum):
    NEUTRAL = "Neutral"
    HAPPY = "Happy"
    URGENT = "Urgent"


class Context(str, Enum):
    GENERAL = "General"
    HOSPITAL = "Hospital"
    CLASS = "Class"
    SHOP = "Shop"


class Language(str, Enum):
    ENGLISH = "en-US"
    HINDI = "hi-IN"
    SPANISH = "es-ES"


def label_text(label: str | Enum | None) -> str:
    """Plain text of a label (``""`` for no label)."""
    if label is None:
        return ""
    if isinstance(label, Enum):
        return str(label.value)
    return str(label)
