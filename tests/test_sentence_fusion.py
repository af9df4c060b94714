import random

import pytest

from sambhav.labels import Context, Emotion, Gesture
from sambhav.sentence_fusion import (
    CONTEXT_PATTERNS,
    EMERGENCY_SENTENCE,
    SentenceFusion,
    enhance_meaning,
    resolve_context,
)


@pytest.fixture
def fusion():
    return SentenceFusion(rng=random.Random(7))


@pytest.mark.parametrize("context", list(Context) + ["UnknownContext"])
def test_urgent_help_is_emergency_in_every_context(fusion, context):
    assert fusion.fuse(Gesture.HELP, context, Emotion.URGENT) == EMERGENCY_SENTENCE
    assert EMERGENCY_SENTENCE == "EMERGENCY! I need help immediately!"


def test_urgent_help_ignores_table_contents():
    fusion = SentenceFusion(patterns={Context.GENERAL: {"Help": ["whatever"]}})
    assert fusion.fuse(Gesture.HELP, Context.GENERAL, Emotion.URGENT) == EMERGENCY_SENTENCE


def test_urgent_pain():
    fusion = SentenceFusion()
    assert fusion.fuse("Pain", Context.HOSPITAL, Emotion.URGENT) == "It hurts a lot! Please help!"


def test_urgent_other_sign_is_shouted(fusion):
    out = fusion.fuse(Gesture.HELLO, Context.HOSPITAL, Emotion.URGENT)
    assert out in {"HELLO, DOCTOR.! HURRY!", "HI, NURSE.! HURRY!"}


def test_urgent_unknown_sign_uses_label_text(fusion):
    assert fusion.fuse(Gesture.VICTORY, Context.GENERAL, Emotion.URGENT) == "VICTORY! HURRY!"


def test_happy_overrides(fusion):
    assert fusion.fuse(Gesture.HELLO, Context.SHOP, Emotion.HAPPY) == "Hello! So glad to see you!"
    assert fusion.fuse(Gesture.THANKS, Context.CLASS, Emotion.HAPPY) == "Thank you so much!"


def test_happy_adds_friendly_suffix(fusion):
    out = fusion.fuse(Gesture.HELP, Context.CLASS, Emotion.HAPPY)
    assert out in {"I have a doubt. 😊", "Can you explain this again? 😊"}


def test_neutral_returns_context_phrase(fusion):
    out = fusion.fuse(Gesture.HELLO, Context.HOSPITAL, Emotion.NEUTRAL)
    assert out in CONTEXT_PATTERNS[Context.HOSPITAL]["Hello"]


def test_unknown_context_falls_back_to_general(fusion):
    out = fusion.fuse(Gesture.HELLO, "UnknownContext", Emotion.NEUTRAL)
    assert out in CONTEXT_PATTERNS[Context.GENERAL]["Hello"]
    assert resolve_context("UnknownContext") is Context.GENERAL
    assert resolve_context(None) is Context.GENERAL
    assert resolve_context("Shop") is Context.SHOP


def test_sign_without_phrase_is_spoken_as_label(fusion):
    assert fusion.fuse(Gesture.LOOK, Context.GENERAL, Emotion.NEUTRAL) == "Look"
    # Pain only has phrasing in the hospital
    assert fusion.fuse("Pain", Context.SHOP, Emotion.NEUTRAL) == "Pain"


def test_unknown_emotion_is_neutral(fusion):
    out = fusion.fuse(Gesture.THANKS, Context.GENERAL, "Bored")
    assert out in CONTEXT_PATTERNS[Context.GENERAL]["Thanks"]


def test_plain_string_inputs(fusion):
    assert fusion.fuse("Help", "Shop", "Urgent") == EMERGENCY_SENTENCE
    assert fusion.fuse("Hello", "General", "Happy") == "Hello! So glad to see you!"


def test_selection_is_random_but_seedable():
    a = SentenceFusion(rng=random.Random(3))
    b = SentenceFusion(rng=random.Random(3))
    seq_a = [a.fuse(Gesture.HELLO, Context.GENERAL) for _ in range(20)]
    seq_b = [b.fuse(Gesture.HELLO, Context.GENERAL) for _ in range(20)]
    assert seq_a == seq_b
    assert set(seq_a) == set(CONTEXT_PATTERNS[Context.GENERAL]["Hello"])


def test_every_phrase_list_is_non_empty():
    for table in CONTEXT_PATTERNS.values():
        for options in table.values():
            assert options


def test_module_shortcut():
    assert enhance_meaning(Gesture.HELP, Context.CLASS, Emotion.URGENT) == EMERGENCY_SENTENCE
