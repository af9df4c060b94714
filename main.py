#!/usr/bin/env python3
"""
main.py – Sambhav orchestrator.

Pipeline:
  Webcam  ──►  MediaPipe Hands + Face Mesh  ──►  SignPipeline  ──►  stdout / overlay / speech

Keys (display mode)
-------------------
    q / Esc   quit
    c         cycle context (General → Hospital → Class → Shop)
    l         cycle speech language
    a         acknowledge (dismiss) an emergency
    g / n     simulate a GPS fix: hospital / normal location

Usage
-----
    python main.py                          # default webcam, General context
    python main.py --context Hospital       # start in hospital phrasing
    python main.py --camera 1 --fps 15      # slower camera: rescale emergency hold
    python main.py --speak --language hi-IN # speak sentences with a Hindi voice
    python main.py --no-display             # headless (e.g. SSH / CI)
    python main.py --say-text "I need water" # reverse mode: print the sign playback plan
"""

from __future__ import annotations

import argparse
import logging
import random
import sys

import cv2
import numpy as np

from sambhav.emergency import EmergencyDetector, hold_frames_for_fps
from sambhav.labels import Context, Language, label_text
from sambhav.pipeline import EMERGENCY_BANNER, EVENT_EMERGENCY, FrameResult, SignPipeline
from sambhav.sentence_fusion import SentenceFusion
from sambhav.sign_sequencer import MODE_VIDEO, SignSequencer, SignStep
from sambhav.speech import Speaker
from sambhav.vision_tracker import HandFaceTracker, draw_hands

CONTEXT_CYCLE = list(Context)
LANGUAGE_CYCLE = list(Language)


def _next_in(cycle: list, current):
    return cycle[(cycle.index(current) + 1) % len(cycle)]


# ── Overlay ──────────────────────────────────────────────────────────────────


def _shaded_box(frame: np.ndarray, x1: int, y1: int, x2: int, y2: int, colour) -> None:
    """Blend a filled rectangle into *frame* (Zoom-style translucent strip)."""
    roi = frame[y1:y2, x1:x2].copy()
    cv2.rectangle(roi, (0, 0), (x2 - x1, y2 - y1), colour, -1)
    frame[y1:y2, x1:x2] = cv2.addWeighted(roi, 0.5, frame[y1:y2, x1:x2], 0.5, 0)


def draw_overlay(
    frame: np.ndarray,
    pipeline: SignPipeline,
    result: FrameResult,
    backend: str,
    sentence: str | None,
) -> None:
    h, w = frame.shape[:2]
    font = cv2.FONT_HERSHEY_SIMPLEX
    scale = 0.48
    thickness = 1
    color_text = (220, 220, 220)  # soft white (BGR)
    color_bar = (32, 32, 32)      # dark bar
    color_alert = (40, 40, 220)   # red

    # Top bar: status
    bar_h = 64
    _shaded_box(frame, 0, 0, w, bar_h, color_bar)
    stable = label_text(pipeline.stable_label) or "-"
    info_lines = [
        f"{backend}  ·  Context: {pipeline.context.value}  ·  Lang: {pipeline.language.value}",
        f"Emotion: {result.emotion.value.upper()}  ·  Hands: {len(result.raw_labels)}",
        f"Sign: {stable}",
    ]
    for i, line in enumerate(info_lines):
        cv2.putText(frame, line, (14, 20 + i * 20), font, scale, color_text, thickness, cv2.LINE_AA)

    # Bottom: sentence bubble, replaced by the alert banner while latched
    text = EMERGENCY_BANNER if pipeline.emergency_active else sentence
    if text:
        big = 0.8
        (tw, th), _ = cv2.getTextSize(text, font, big, 2)
        x1 = max(0, (w - tw) // 2 - 16)
        y1 = max(bar_h, h - 120)
        x2 = min(w, x1 + tw + 32)
        y2 = min(h, y1 + th + 24)
        _shaded_box(frame, x1, y1, x2, y2, color_alert if pipeline.emergency_active else color_bar)
        cv2.putText(frame, text, (x1 + 16, y2 - 12), font, big, (255, 255, 255), 2, cv2.LINE_AA)

    # Bottom-right: key hints
    hint = "Q quit  C context  L lang  A ack"
    (tw, th), _ = cv2.getTextSize(hint, font, scale, thickness)
    qx1, qy1 = w - tw - 28, h - th - 20
    _shaded_box(frame, qx1, qy1, w - 6, h - 6, color_bar)
    cv2.putText(frame, hint, (qx1 + 10, h - 12), font, scale, color_text, thickness, cv2.LINE_AA)


# ── Reverse mode ─────────────────────────────────────────────────────────────


def run_reverse(text: str, sequencer: SignSequencer | None = None) -> list[SignStep]:
    """Print the sign playback plan for *text* (one step per word)."""
    sequencer = sequencer if sequencer is not None else SignSequencer()
    steps = sequencer.plan(text)
    for i, step in enumerate(steps, 1):
        shown = step.clip if step.mode == MODE_VIDEO else " ".join(step.letters)
        print(f"  [{i:>2}] {step.display:<14} {step.mode:<8} {step.duration:.1f}s  {shown}")
    print(f"[Sambhav] Sign playback: {len(steps)} step(s), {sequencer.total_duration(steps):g} s")
    return steps


# ── Main loop ────────────────────────────────────────────────────────────────


def positive_float(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a number, got {text!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {text}")
    return value


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Sambhav – sign + emotion to natural speech")
    p.add_argument("--camera", type=int, default=0, help="Camera device index")
    p.add_argument(
        "--context",
        choices=[c.value for c in Context],
        default=Context.GENERAL.value,
        help="Initial conversation context",
    )
    p.add_argument(
        "--language",
        choices=[lang.value for lang in Language],
        default=Language.ENGLISH.value,
        help="Speech language",
    )
    p.add_argument(
        "--fps",
        type=positive_float,
        default=30.0,
        help="Camera frame rate; rescales the ~2 s emergency hold (default 30)",
    )
    p.add_argument("--seed", type=int, default=None, help="Seed phrase selection (reproducible output)")
    p.add_argument(
        "--speak",
        action="store_true",
        help="Speak sentences via pyttsx3 (background thread; a newer sentence drops queued ones)",
    )
    p.add_argument(
        "--say-text",
        metavar="TEXT",
        default=None,
        help="Reverse mode: print the sign playback plan for TEXT and exit (no camera)",
    )
    p.add_argument("--no-face", action="store_true", help="Skip face mesh (emotion stays Neutral)")
    p.add_argument(
        "--hand-confidence",
        type=float,
        default=0.6,
        help="Minimum hand detection/tracking confidence",
    )
    p.add_argument(
        "--face-confidence",
        type=float,
        default=0.5,
        help="Minimum face detection/tracking confidence",
    )
    p.add_argument(
        "--no-display",
        action="store_true",
        help="Headless mode – skip OpenCV window",
    )
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for pipeline internals",
    )
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.say_text is not None:
        run_reverse(args.say_text)
        return

    # ── Initialise pipeline components ───────────────────────────────────
    hold = hold_frames_for_fps(args.fps)
    pipeline = SignPipeline(
        context=args.context,
        language=args.language,
        emergency=EmergencyDetector(hold_frames=hold),
        fusion=SentenceFusion(rng=random.Random(args.seed)),
    )
    tracker = HandFaceTracker(
        hand_confidence=args.hand_confidence,
        face_confidence=args.face_confidence,
        track_face=not args.no_face,
    )
    speaker = Speaker(language=args.language) if args.speak else None

    print(f"[Sambhav] Vision backend : {tracker.mode}")
    print(f"[Sambhav] Context        : {pipeline.context.value}")
    print(f"[Sambhav] Language       : {pipeline.language.value}")
    print(f"[Sambhav] Emergency hold : {hold} frames @ {args.fps:g} fps")
    if speaker is not None:
        print(f"[Sambhav] Speech         : {'on' if speaker.enabled else 'unavailable'}")
    print("[Sambhav] Press 'q' to quit.\n")

    def say(text: str) -> None:
        if speaker is not None:
            speaker.say(text)

    sentence: str | None = None

    # ── Webcam loop ──────────────────────────────────────────────────────
    cap = cv2.VideoCapture(args.camera)
    if not cap.isOpened():
        print(f"[Sambhav] Cannot open camera {args.camera}", file=sys.stderr)
        sys.exit(1)

    try:
        while True:
            ret, frame = cap.read()
            if not ret:
                break

            # 1. Track hands + face
            tracked = tracker.track(frame)

            # 2. Classify, stabilise, fuse
            result = pipeline.process_frame(tracked.hands, tracked.face)

            # 3. Report events
            for event in result.events:
                sentence = event.sentence
                if event.kind == EVENT_EMERGENCY:
                    print(f"  !! EMERGENCY ({event.context.value}): {event.sentence}")
                else:
                    print(
                        f"  >> SIGN: {event.label_name}  [{event.context.value} / "
                        f"{event.emotion.value}]  \"{event.sentence}\""
                    )
                say(event.sentence)

            # 4. Draw overlay and handle keys
            if not args.no_display:
                draw_hands(frame, tracked.hands, [label_text(r) for r in result.raw_labels])
                draw_overlay(frame, pipeline, result, tracker.mode, sentence)

                cv2.imshow("Sambhav", frame)
                key = cv2.waitKey(1) & 0xFF
                if key == ord("q") or key == 27:  # Q or Escape
                    break
                if key == ord("c"):
                    pipeline.set_context(_next_in(CONTEXT_CYCLE, pipeline.context))
                    print(f"[Sambhav] Context -> {pipeline.context.value}")
                elif key == ord("l"):
                    pipeline.set_language(_next_in(LANGUAGE_CYCLE, pipeline.language))
                    if speaker is not None:
                        speaker.set_language(pipeline.language)
                    print(f"[Sambhav] Language -> {pipeline.language.value}")
                elif key == ord("a") and pipeline.emergency_active:
                    pipeline.acknowledge_emergency()
                    print("[Sambhav] Emergency acknowledged.")
                elif key in (ord("g"), ord("n")):
                    announcement = pipeline.simulate_location("Hospital" if key == ord("g") else "Home")
                    print(f"[Sambhav] {announcement}")
                    say(announcement)

    except KeyboardInterrupt:
        print("\n[Sambhav] Interrupted.")
    finally:
        cap.release()
        tracker.close()
        pipeline.reset()
        if speaker is not None:
            speaker.close()
        if not args.no_display:
            cv2.destroyAllWindows()
        print("[Sambhav] Done.")


if __name__ == "__main__":
    main()
