import pytest

pytest.importorskip("cv2")

import main  # noqa: E402
from sambhav.sign_sequencer import MODE_SPELLING, MODE_VIDEO, SignSequencer  # noqa: E402


@pytest.mark.parametrize("fps", ["0", "-5", "fast"])
def test_fps_must_be_positive(fps, capsys):
    with pytest.raises(SystemExit) as exc:
        main.parse_args(["--fps", fps])
    assert exc.value.code == 2
    assert "--fps" in capsys.readouterr().err


def test_fps_accepts_fractional_rates():
    assert main.parse_args(["--fps", "2.5"]).fps == 2.5
    assert main.parse_args([]).fps == 30.0


def test_reverse_mode_prints_plan_without_camera(monkeypatch, capsys):
    def no_camera(*args, **kwargs):
        raise AssertionError("camera opened in reverse mode")

    monkeypatch.setattr(main.cv2, "VideoCapture", no_camera)
    main.main(["--say-text", "help me"])

    out = capsys.readouterr().out
    assert "H E L P" in out and "M E" in out
    assert "2 step(s), 2 s" in out


def test_run_reverse_uses_clips(capsys):
    seq = SignSequencer(clips={"water": "clips/water.mp4"})
    steps = main.run_reverse("Water please", seq)

    assert [s.mode for s in steps] == [MODE_VIDEO, MODE_SPELLING]
    out = capsys.readouterr().out
    assert "WATER" in out and "clips/water.mp4" in out
