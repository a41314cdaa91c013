# moodcam/loop.py
"""
The mood loop: platform check -> camera -> models -> polling.

Each tick reads the current frame, runs one inference pass and publishes the
mood of the first detected face. A busy flag keeps inference passes from
overlapping; ticks that arrive while one is in flight are skipped.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional, Set

from moodcam.capture import CaptureHandle, acquire, check_platform
from moodcam.config import Settings
from moodcam.emotion import DETECTION_ERROR_MESSAGE, NO_FACE_MESSAGE, mood_from_expressions
from moodcam.errors import MoodCamError, PlatformUnsupported
from moodcam.inference import ModelBackend, load_models
from moodcam.models import FaceResult
from moodcam.sinks import PresentationSink

logger = logging.getLogger(__name__)

STATUS_CAMERA = "Requesting camera access..."
STATUS_MODELS = "Loading AI models..."
STATUS_READY = "AI Ready - Analyzing your mood..."


@dataclass
class MoodState:
    capture: Optional[CaptureHandle] = None
    ready: bool = False
    busy: bool = False
    closing: bool = False


def _infer_current_frame(capture: CaptureHandle, backend: ModelBackend) -> List[FaceResult]:
    return backend.infer(capture.read())


def release_capture(state: MoodState) -> None:
    if state.capture is not None:
        state.capture.release()
        state.capture = None


def _settle(state: MoodState) -> None:
    state.busy = False
    if state.closing:
        release_capture(state)


async def tick(state: MoodState, backend: ModelBackend, sink: PresentationSink) -> None:
    """One polling iteration. No-op until models are ready or while a pass is in flight."""
    if not state.ready or state.busy:
        return
    state.busy = True
    job = asyncio.get_running_loop().run_in_executor(None, _infer_current_frame, state.capture, backend)
    try:
        faces = await asyncio.shield(job)
        if not faces:
            sink.show_mood(NO_FACE_MESSAGE)
            return
        sink.show_mood(mood_from_expressions(faces[0].expressions))
    except Exception:
        logger.exception("[loop] detection error")
        sink.show_mood(DETECTION_ERROR_MESSAGE)
    finally:
        if job.done():
            _settle(state)
        else:
            # cancelled mid-read: the worker thread still owns the device
            job.add_done_callback(lambda _: _settle(state))


async def run_polling(state: MoodState,
                      backend: ModelBackend,
                      sink: PresentationSink,
                      interval: float,
                      ticks: Optional[int] = None) -> None:
    """
    Fire a tick every `interval` seconds without waiting for the previous one.

    Runs until cancelled, or for `ticks` iterations when given (the last
    in-flight ticks are awaited before returning).
    """
    in_flight: Set[asyncio.Task] = set()
    fired = 0
    try:
        while ticks is None or fired < ticks:
            task = asyncio.create_task(tick(state, backend, sink))
            in_flight.add(task)
            task.add_done_callback(in_flight.discard)
            fired += 1
            await asyncio.sleep(interval)
        if in_flight:
            await asyncio.gather(*in_flight)
    finally:
        for task in in_flight:
            task.cancel()


async def start_mood_loop(settings: Settings,
                          backend: ModelBackend,
                          sink: PresentationSink,
                          state: Optional[MoodState] = None,
                          ticks: Optional[int] = None) -> MoodState:
    """
    Run the whole startup sequence, then poll.

    Startup failures are published to the mood slot and end the loop; the
    returned state shows how far startup got.
    """
    state = state if state is not None else MoodState()

    try:
        check_platform()
    except PlatformUnsupported as e:
        logger.error(f"[loop] {e}")
        sink.show_status(None)
        sink.show_mood(str(e))
        return state

    try:
        sink.show_status(STATUS_CAMERA)
        state.capture = await acquire(settings)
        sink.show_status(STATUS_MODELS)
        await load_models(backend, settings)
        state.ready = True
        sink.show_status(STATUS_READY)
        await asyncio.sleep(settings.READY_DELAY)
        sink.show_status(None)
    except MoodCamError as e:
        logger.error(f"[loop] initialization error: {e}")
        sink.show_status(None)
        sink.show_mood(str(e))
        release_capture(state)
        return state

    logger.debug(f"[loop] polling every {settings.POLL_INTERVAL}s")
    try:
        await run_polling(state, backend, sink, settings.POLL_INTERVAL, ticks=ticks)
    finally:
        # an in-flight read releases the device itself once its thread returns
        state.closing = True
        if not state.busy:
            release_capture(state)
    return state
