"""
pipeline.py – One camera session's worth of sign → sentence processing.

Per video frame::

    face ──► EmotionClassifier ──► current emotion
    hand ──► GestureClassifier ──► EmergencyDetector (every hand frame)
                              └──► TemporalStabilizer ──► SentenceFusion ──► GestureEvent

The face is evaluated first so gesture events in the same frame see that
frame's emotion.  With no face in view the previous emotion carries over.

Only stable labels reach :class:`SentenceFusion`.  When the emergency latch
sets before ``Help`` has stabilised (short hold at a low frame rate) the
escalation event waits for the frame on which ``Help`` becomes stable.

A :class:`SignPipeline` owns the only cross-frame state (stabilizer window
and emergency latch).  It is not thread-safe: use one instance per camera
session and call :meth:`SignPipeline.process_frame` for one frame at a time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from sambhav.emergency import EmergencyDetector
from sambhav.emotion_classifier import EmotionClassifier
from sambhav.gesture_classifier import GestureClassifier
from sambhav.labels import Context, Emotion, Gesture, Language, label_text
from sambhav.sentence_fusion import SentenceFusion
from sambhav.stabilizer import TemporalStabilizer

logger = logging.getLogger(__name__)

# ── Constants ────────────────────────────────────────────────────────────────

EMERGENCY_BANNER = "EMERGENCY! I NEED HELP!"

LOCATION_ANNOUNCEMENTS = {
    Context.HOSPITAL: "Detected Location: City Hospital. Switching to Medical mode.",
    Context.GENERAL: "Location Normal. Switching to General mode.",
}

EVENT_GESTURE = "gesture"
EVENT_EMERGENCY = "emergency"


# ── Output records ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class GestureEvent:
    """A sentence ready for display / speech."""

    label: Gesture
    sentence: str
    emotion: Emotion
    context: Context
    language: Language
    emergency_active: bool
    kind: str = EVENT_GESTURE

    @property
    def label_name(self) -> str:
        return label_text(self.label)


@dataclass
class FrameResult:
    emotion: Emotion
    raw_labels: list[Optional[Gesture]] = field(default_factory=list)
    events: list[GestureEvent] = field(default_factory=list)
    emergency_active: bool = False

    @property
    def emergency_raised(self) -> bool:
        return any(e.kind == EVENT_EMERGENCY for e in self.events)


# ── Orchestrator ─────────────────────────────────────────────────────────────


class SignPipeline:
    """Drive classifiers, stabilizer, emergency latch and fusion per frame.

    Parameters
    ----------
    context, language :
        Initial UI selections.
    gesture_classifier, emotion_classifier, stabilizer, emergency, fusion :
        Component overrides (tests, tuned thresholds, seeded fusion).
    """

    def __init__(
        self,
        context: Context | str = Context.GENERAL,
        language: Language | str = Language.ENGLISH,
        gesture_classifier: GestureClassifier | None = None,
        emotion_classifier: EmotionClassifier | None = None,
        stabilizer: TemporalStabilizer | None = None,
        emergency: EmergencyDetector | None = None,
        fusion: SentenceFusion | None = None,
    ) -> None:
        self.gesture_classifier = gesture_classifier if gesture_classifier is not None else GestureClassifier()
        self.emotion_classifier = emotion_classifier if emotion_classifier is not None else EmotionClassifier()
        self.stabilizer = stabilizer if stabilizer is not None else TemporalStabilizer()
        self.emergency = emergency if emergency is not None else EmergencyDetector()
        self.fusion = fusion if fusion is not None else SentenceFusion()

        self._context = Context(label_text(context))
        self._language = Language(label_text(language))
        self._emotion = Emotion.NEUTRAL
        self._last_event: GestureEvent | None = None
        self._escalation_pending = False

    # ── UI-facing state ───────────────────────────────────────────────────

    @property
    def context(self) -> Context:
        return self._context

    def set_context(self, context: Context | str) -> None:
        """Select the phrasing context; raises ``ValueError`` outside the closed set."""
        new = Context(label_text(context))
        if new is not self._context:
            logger.info("Context %s -> %s", self._context.value, new.value)
        self._context = new

    @property
    def language(self) -> Language:
        return self._language

    def set_language(self, language: Language | str) -> None:
        new = Language(label_text(language))
        if new is not self._language:
            logger.info("Language %s -> %s", self._language.value, new.value)
        self._language = new

    @property
    def emotion(self) -> Emotion:
        return self._emotion

    @property
    def emergency_active(self) -> bool:
        return self.emergency.active

    @property
    def stable_label(self) -> Gesture | None:
        return self.stabilizer.stable_label

    @property
    def last_event(self) -> GestureEvent | None:
        return self._last_event

    def acknowledge_emergency(self) -> None:
        self.emergency.acknowledge()
        self._escalation_pending = False

    def simulate_location(self, location: str) -> str:
        """Switch context from a (simulated) location fix; return the announcement."""
        target = Context.HOSPITAL if label_text(location) == Context.HOSPITAL.value else Context.GENERAL
        self.set_context(target)
        return LOCATION_ANNOUNCEMENTS[target]

    def reset(self) -> None:
        """Forget session state (tracking stopped); keeps context and language."""
        self.stabilizer.reset()
        self.emergency.reset()
        self._escalation_pending = False
        self._emotion = Emotion.NEUTRAL
        self._last_event = None

    # ── Per-frame processing ──────────────────────────────────────────────

    def process_frame(self, hands: Iterable = (), face=None) -> FrameResult:
        """Run one video frame through the pipeline.

        Parameters
        ----------
        hands :
            Zero or more hand landmark sets (21 points each), in tracker order.
        face :
            At most one face landmark set (≥ 468 points) or ``None``.

        Returns
        -------
        FrameResult
            Current emotion, the raw per-hand labels and any events this
            frame produced.  Never raises on malformed landmark data.
        """
        if face is not None:
            self._emotion = self.emotion_classifier.classify(face)

        result = FrameResult(emotion=self._emotion)
        for hand in hands if hands is not None else ():
            raw = self.gesture_classifier.classify(hand)
            result.raw_labels.append(raw)

            if self.emergency.update(raw):
                self._escalation_pending = True

            stable = self.stabilizer.push(raw)
            if stable is not None:
                result.events.append(self._emit(stable, EVENT_GESTURE))

            # escalate only once Help is the confirmed stable sign
            if (
                self._escalation_pending
                and self.emergency.active
                and self.stabilizer.stable_label == Gesture.HELP
            ):
                self._escalation_pending = False
                result.events.append(self._emit(Gesture.HELP, EVENT_EMERGENCY, fuse_emotion=Emotion.URGENT))

        result.emergency_active = self.emergency.active
        return result

    def _emit(self, label: Gesture, kind: str, fuse_emotion: Emotion | None = None) -> GestureEvent:
        sentence = self.fusion.fuse(label, self._context, fuse_emotion or self._emotion)
        event = GestureEvent(
            label=label,
            sentence=sentence,
            emotion=self._emotion,
            context=self._context,
            language=self._language,
            emergency_active=self.emergency.active,
            kind=kind,
        )
        logger.debug("%s event: %s -> %r", kind, label_text(label), sentence)
        self._last_event = event
        return event
