"""
sign_sequencer.py – Reverse mode: typed text → sign playback plan.

Each word becomes one timed step.  Words with a recorded sign clip play the
clip; anything else is fingerspelled letter by letter.  Rendering the plan
(avatar, video) is up to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

# ── Constants ────────────────────────────────────────────────────────────────

SECONDS_PER_WORD = 1.0

MODE_VIDEO = "video"
MODE_SPELLING = "spelling"


@dataclass(frozen=True)
class SignStep:
    word: str
    mode: str
    duration: float
    clip: str | None = None
    letters: tuple[str, ...] = ()

    @property
    def display(self) -> str:
        return self.word.upper()


class SignSequencer:
    """Plan sign playback for a sentence.

    Parameters
    ----------
    clips : mapping of str to str, optional
        Lower-case word → clip reference (path or URL).
    seconds_per_word : float
        Display time of every step.
    """

    def __init__(
        self,
        clips: Mapping[str, str] | None = None,
        seconds_per_word: float = SECONDS_PER_WORD,
    ) -> None:
        if seconds_per_word <= 0:
            raise ValueError(f"seconds_per_word must be positive, got {seconds_per_word}")
        self.clips = {k.lower(): v for k, v in (clips or {}).items()}
        self.seconds_per_word = seconds_per_word

    def plan(self, text: str) -> list[SignStep]:
        steps: list[SignStep] = []
        for word in (text or "").split():
            clip = self.clips.get(word.lower())
            if clip is not None:
                steps.append(SignStep(word, MODE_VIDEO, self.seconds_per_word, clip=clip))
            else:
                letters = tuple(ch.upper() for ch in word if ch.isalnum())
                steps.append(SignStep(word, MODE_SPELLING, self.seconds_per_word, letters=letters))
        return steps

    @staticmethod
    def total_duration(steps: list[SignStep]) -> float:
        return sum(step.duration for step in steps)
