import pytest

from sambhav.sign_sequencer import MODE_SPELLING, MODE_VIDEO, SignSequencer


def test_words_become_timed_steps():
    seq = SignSequencer(clips={"Hello": "clips/hello.mp4"})
    steps = seq.plan("hello  my friend")

    assert [s.word for s in steps] == ["hello", "my", "friend"]
    assert [s.display for s in steps] == ["HELLO", "MY", "FRIEND"]
    assert steps[0].mode == MODE_VIDEO and steps[0].clip == "clips/hello.mp4"
    assert steps[1].mode == MODE_SPELLING and steps[1].letters == ("M", "Y")
    assert seq.total_duration(steps) == pytest.approx(3.0)


def test_spelling_drops_punctuation():
    (step,) = SignSequencer().plan("can't!")
    assert step.letters == ("C", "A", "N", "T")
    assert step.display == "CAN'T!"


@pytest.mark.parametrize("text", ["", "   ", None])
def test_empty_text_has_no_steps(text):
    assert SignSequencer().plan(text) == []


def test_custom_pace():
    seq = SignSequencer(seconds_per_word=0.5)
    assert seq.total_duration(seq.plan("a b c d")) == pytest.approx(2.0)
    with pytest.raises(ValueError):
        SignSequencer(seconds_per_word=0)
