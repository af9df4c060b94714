import pytest

from sambhav.emergency import EmergencyDetector, hold_frames_for_fps
from sambhav.labels import Gesture


def hold(det, label, frames):
    return [det.update(label) for _ in range(frames)]


def test_sixty_one_help_frames_latch():
    det = EmergencyDetector()
    raised = hold(det, Gesture.HELP, 61)
    assert det.active is True
    assert raised.index(True) == 60  # the 61st frame
    assert raised.count(True) == 1


@pytest.mark.parametrize("frames", [59, 60])
def test_short_hold_does_not_latch(frames):
    det = EmergencyDetector()
    hold(det, Gesture.HELP, frames)
    assert det.active is False
    assert det.counter == frames


def test_interruption_resets_counter():
    det = EmergencyDetector()
    hold(det, Gesture.HELP, 50)
    det.update(None)
    assert det.counter == 0
    hold(det, Gesture.HELP, 50)
    assert det.active is False


def test_latch_survives_other_signs():
    det = EmergencyDetector()
    hold(det, Gesture.HELP, 61)
    assert not any(hold(det, Gesture.HELLO, 100))
    assert det.active is True
    assert det.counter == 0


def test_acknowledge_clears_and_resets():
    det = EmergencyDetector()
    hold(det, Gesture.HELP, 70)
    det.acknowledge()
    assert det.active is False
    assert det.counter == 0
    # a fresh sustained hold is needed to latch again
    raised = hold(det, Gesture.HELP, 61)
    assert det.active is True
    assert raised.count(True) == 1


def test_continued_hold_does_not_raise_twice():
    det = EmergencyDetector()
    assert hold(det, Gesture.HELP, 200).count(True) == 1


def test_plain_text_label_counts():
    det = EmergencyDetector(hold_frames=2)
    hold(det, "Help", 3)
    assert det.active


def test_hold_frames_for_fps():
    assert hold_frames_for_fps(30) == 60
    assert hold_frames_for_fps(15) == 30
    assert hold_frames_for_fps(60, seconds=1.5) == 90
    with pytest.raises(ValueError):
        hold_frames_for_fps(0)


def test_custom_hold():
    det = EmergencyDetector(hold_frames=hold_frames_for_fps(15))
    hold(det, Gesture.HELP, 31)
    assert det.active
