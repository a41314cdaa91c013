"""
CLI: run the mood loop against the local webcam and print moods.
"""
from __future__ import annotations
import argparse, asyncio, logging
from moodcam.config import Settings
from moodcam.inference import DeepFaceBackend
from moodcam.loop import start_mood_loop
from moodcam.sinks import ConsoleSink

def main():
    p = argparse.ArgumentParser()
    p.add_argument("--camera", type=int, default=None, help="Camera index for the default request")
    p.add_argument("--interval", type=float, default=None, help="Seconds between ticks")
    p.add_argument("--model-url", default=None, help="Base URL the model weights are fetched from")
    p.add_argument("--ticks", type=int, default=None, help="Stop after N ticks (default: run until Ctrl+C)")
    p.add_argument("-v", "--verbose", action="store_true")
    args = p.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    overrides = {}
    if args.camera is not None:
        overrides["CAMERA_INDEX"] = args.camera
    if args.interval is not None:
        overrides["POLL_INTERVAL"] = args.interval
    if args.model_url is not None:
        overrides["MODEL_BASE_URL"] = args.model_url
    settings = Settings(**overrides)

    try:
        state = asyncio.run(start_mood_loop(settings, DeepFaceBackend(settings), ConsoleSink(), ticks=args.ticks))
    except KeyboardInterrupt:
        return 0
    return 0 if state.ready else 1

if __name__ == "__main__":
    raise SystemExit(main())
