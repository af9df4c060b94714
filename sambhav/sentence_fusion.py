"""sentence_fusion.py – Turn a stable sign into a context- and emotion-aware sentence.

Two stages:

1. **Context phrasing** – each situational context (General, Hospital,
   Class, Shop) has its own table of candidate phrasings per sign; one is
   picked at random so repeated signs do not sound robotic.  Unknown
   contexts use the General table; signs without an entry are spoken as
   their bare label.
2. **Emotion infusion** – the signer's facial expression can replace or
   reshape the phrase (an urgent face turns "Help" into an emergency call).

Pure text in, text out: no speech or display happens here.
"""

from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional

from sambhav.labels import Context, Emotion, label_text

logger = logging.getLogger(__name__)

EMERGENCY_SENTENCE = "EMERGENCY! I need help immediately!"
PAIN_SENTENCE = "It hurts a lot! Please help!"
HAPPY_HELLO_SENTENCE = "Hello! So glad to see you!"
HAPPY_THANKS_SENTENCE = "Thank you so much!"
URGENT_SUFFIX = "! HURRY!"
HAPPY_SUFFIX = " 😊"

CONTEXT_PATTERNS: Dict[Context, Dict[str, List[str]]] = {
    Context.GENERAL: {
        "Hello": ["Hello, how are you?", "Hi there!"],
        "Help": ["Can you help me?", "I need assistance."],
        "Thanks": ["Thank you very much.", "Thanks a lot."],
        "Yes": ["Yes, that is correct.", "Sure."],
        "No": ["No, thank you.", "I don't think so."],
    },
    Context.HOSPITAL: {
        "Hello": ["Hello, Doctor.", "Hi, Nurse."],
        "Help": ["I need a doctor immediately.", "Please call a nurse."],
        "Pain": ["I am experiencing severe pain.", "It hurts right here."],
        "Water": ["Can I get some water, please?", "I am thirsty."],
        "Thanks": ["Thank you for your care.", "Thanks for helping me."],
    },
    Context.CLASS: {
        "Hello": ["Good morning, Teacher.", "Hi everyone."],
        "Help": ["I have a doubt.", "Can you explain this again?"],
        "Yes": ["I understand.", "Present, sir/ma'am."],
        "No": ["I didn't get that.", "I disagree."],
        "Thanks": ["Thank you for the explanation.", "Thanks, teacher."],
    },
    Context.SHOP: {
        "Hello": ["Hi, do you have this item?", "Hello, I am looking for something."],
        "Help": ["Where is the billing counter?", "Can you show me the price?"],
        "Yes": ["I will take this.", "Yes, pack it please."],
        "No": ["No, that's too expensive.", "I don't need a bag."],
        "Thanks": ["Thank you.", "Keep the change."],
    },
}


def resolve_context(context) -> Context:
    """Map *context* onto the closed set, falling back to ``General``."""
    try:
        return Context(label_text(context))
    except ValueError:
        logger.debug("Unknown context %r, using General phrasing", context)
        return Context.GENERAL


def resolve_emotion(emotion) -> Emotion:
    try:
        return Emotion(label_text(emotion))
    except ValueError:
        logger.debug("Unknown emotion %r, treating as Neutral", emotion)
        return Emotion.NEUTRAL


class SentenceFusion:
    """Combine a stable sign, the active context and the current emotion.

    Parameters
    ----------
    patterns:
        Per-context phrase tables.  Defaults to :data:`CONTEXT_PATTERNS`.
    rng:
        Random source used to pick among candidate phrasings.  Pass a seeded
        ``random.Random`` for reproducible output.
    """

    def __init__(
        self,
        patterns: Optional[Dict[Context, Dict[str, List[str]]]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.patterns = patterns if patterns is not None else CONTEXT_PATTERNS
        self._rng = rng if rng is not None else random.Random()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def phrasings(self, label, context) -> List[str]:
        """Candidate phrasings for *label* in *context* (may be empty)."""
        table = self.patterns.get(resolve_context(context), {})
        return list(table.get(label_text(label), []))

    def base_sentence(self, label, context) -> str:
        options = self.phrasings(label, context)
        if not options:
            return label_text(label)
        return self._rng.choice(options)

    def fuse(self, label, context=Context.GENERAL, emotion=Emotion.NEUTRAL) -> str:
        """Build the sentence for a stable *label*.

        Parameters
        ----------
        label:
            Stable sign (``Gesture`` or plain text such as ``"Pain"``).
        context:
            Active situational context; unknown values use ``General``.
        emotion:
            Current facial emotion; unknown values act as ``Neutral``.

        Returns
        -------
        Sentence text for speech / display.
        """
        text = label_text(label)
        mood = resolve_emotion(emotion)
        base = self.base_sentence(text, context)

        if mood is Emotion.URGENT:
            return self._urgent(text, base)
        if mood is Emotion.HAPPY:
            return self._happy(text, base)
        return base

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _urgent(text: str, base: str) -> str:
        key = text.lower()
        if key == "help":
            return EMERGENCY_SENTENCE
        if key == "pain":
            return PAIN_SENTENCE
        return f"{base.upper()}{URGENT_SUFFIX}"

    @staticmethod
    def _happy(text: str, base: str) -> str:
        key = text.lower()
        if key == "hello":
            return HAPPY_HELLO_SENTENCE
        if key == "thanks":
            return HAPPY_THANKS_SENTENCE
        return f"{base}{HAPPY_SUFFIX}"


_DEFAULT = SentenceFusion()


def enhance_meaning(label, context=Context.GENERAL, emotion=Emotion.NEUTRAL) -> str:
    """Module-level shortcut using a shared, unseeded :class:`SentenceFusion`."""
    return _DEFAULT.fuse(label, context, emotion)
