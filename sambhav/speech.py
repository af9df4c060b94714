"""
speech.py – Speak fused sentences through the local TTS engine (pyttsx3).

Voice choice follows the selected :class:`~sambhav.labels.Language`: a
Google voice for that language if one is installed, otherwise any voice for
it, otherwise the engine default.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Iterable

from sambhav.labels import Language, label_text

logger = logging.getLogger(__name__)

SPEECH_RATE = 150
SPEECH_VOLUME = 0.9


def _voice_matches(voice, code: str) -> bool:
    """True when *voice* advertises language *code* (``en-US`` ≈ ``en_US``)."""
    wanted = {code.lower(), code.lower().replace("-", "_")}
    tags = [str(getattr(voice, "id", "") or "")]
    for lang in getattr(voice, "languages", None) or []:
        if isinstance(lang, bytes):
            lang = lang.decode("utf-8", "ignore")
        tags.append(str(lang))
    return any(w in tag.lower() for tag in tags for w in wanted)


def pick_voice(voices: Iterable, language: Language | str):
    """Return the best installed voice for *language*, or ``None``."""
    code = label_text(language)
    matching = [v for v in voices if _voice_matches(v, code)]
    for voice in matching:
        if "google" in str(getattr(voice, "name", "")).lower():
            return voice
    return matching[0] if matching else None


class Speaker:
    """Background sentence speaker.

    Sentences are queued and spoken by a daemon worker thread so ``say``
    returns immediately and the camera loop keeps its frame rate.  A newer
    sentence replaces any that are still waiting.

    ``enabled`` is ``False`` when the TTS engine could not start; ``say`` is
    then a no-op.

    Parameters
    ----------
    language :
        Initial voice language.
    engine : optional
        Pre-built pyttsx3-compatible engine (``say`` / ``runAndWait`` /
        ``getProperty`` / ``setProperty``); created with ``pyttsx3.init()``
        when omitted.
    """

    def __init__(self, language: Language | str = Language.ENGLISH, engine=None) -> None:
        self._engine = engine
        self._language = Language(label_text(language))
        self._voice_language: Language | None = None
        self._queue: queue.Queue = queue.Queue()
        self._worker: threading.Thread | None = None

        if self._engine is None:
            try:
                import pyttsx3

                self._engine = pyttsx3.init()
            except Exception as exc:
                logger.warning("pyttsx3 engine failed to initialise (%s); speech disabled.", exc)
                self._engine = None
                return

        self._engine.setProperty("rate", SPEECH_RATE)
        self._engine.setProperty("volume", SPEECH_VOLUME)
        self._apply_voice()
        self._worker = threading.Thread(target=self._run, name="sambhav-speech", daemon=True)
        self._worker.start()

    @property
    def enabled(self) -> bool:
        return self._engine is not None

    def set_language(self, language: Language | str) -> None:
        # applied by the worker before its next sentence
        self._language = Language(label_text(language))

    def say(self, text: str) -> None:
        """Queue *text* for speech; never blocks."""
        if not self.enabled or not text:
            return
        self._drain()
        self._queue.put(text)

    def close(self, timeout: float = 2.0) -> None:
        """Stop the worker once queued speech has been spoken."""
        if self._worker is None:
            return
        self._queue.put(None)
        self._worker.join(timeout)
        self._worker = None

    # ── Internal helpers ──────────────────────────────────────────────────

    def _run(self) -> None:
        while True:
            text = self._queue.get()
            if text is None:
                break
            if self._voice_language is not self._language:
                self._apply_voice()
            try:
                self._engine.say(text)
                self._engine.runAndWait()
            except Exception as exc:
                logger.warning("Speech synthesis failed: %s", exc)

    def _drain(self) -> None:
        try:
            while True:
                self._queue.get_nowait()
        except queue.Empty:
            pass

    def _apply_voice(self) -> None:
        language = self._language
        voice = pick_voice(self._engine.getProperty("voices") or [], language)
        if voice is not None:
            self._engine.setProperty("voice", voice.id)
        else:
            logger.info("No installed voice for %s; using engine default.", language.value)
        self._voice_language = language
