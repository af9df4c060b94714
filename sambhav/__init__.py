"""
sambhav – real-time sign + emotion to speech-ready sentences.

Exposes the pure pipeline components:
    GestureClassifier   – rule-based hand-sign classifier
    EmotionClassifier   – face-mesh emotion heuristic
    TemporalStabilizer  – supermajority debounce of raw signs
    EmergencyDetector   – sustained "Help" latch
    SentenceFusion      – context + emotion phrasing
    SignPipeline        – per-frame orchestrator
    SignSequencer       – text to sign playback plan (reverse mode)

Camera and speech adapters live in ``sambhav.vision_tracker`` and
``sambhav.speech`` and need the ``camera`` extra.
"""

from .emergency import EmergencyDetector
from .emotion_classifier import EmotionClassifier
from .gesture_classifier import GestureClassifier
from .labels import Context, Emotion, Gesture, Language
from .pipeline import FrameResult, GestureEvent, SignPipeline
from .sentence_fusion import SentenceFusion
from .sign_sequencer import SignSequencer
from .stabilizer import TemporalStabilizer

__all__ = [
    "Context",
    "EmergencyDetector",
    "Emotion",
    "EmotionClassifier",
    "FrameResult",
    "Gesture",
    "GestureClassifier",
    "GestureEvent",
    "Language",
    "SentenceFusion",
    "SignPipeline",
    "SignSequencer",
    "TemporalStabilizer",
]
