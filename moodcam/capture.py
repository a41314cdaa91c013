# moodcam/capture.py
"""
Camera acquisition.

One permissive request, then exactly one fallback request with a minimal,
explicit profile. A request only counts as successful once the device has
produced its first usable frame.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Tuple

import cv2
import numpy as np

from moodcam.config import Settings
from moodcam.errors import AcquisitionError, InferenceError, PlatformUnsupported
from moodcam.models import CaptureProfile

logger = logging.getLogger(__name__)

UNSUPPORTED_MESSAGE = "Camera not supported on this platform"
ACCESS_DENIED_MESSAGE = (
    "Camera access denied or not available. Please allow camera access and restart."
)

FIRST_FRAME_POLL = 0.05  # seconds between reads while waiting for the first frame


class CaptureHandle:
    """Live video source owned by the mood loop."""

    def __init__(self, cap: cv2.VideoCapture, profile: CaptureProfile, frame_size: Tuple[int, int]):
        self._cap = cap
        self.profile = profile
        self.frame_size = frame_size  # (width, height) of the first frame

    def read(self) -> np.ndarray:
        ok, frame = self._cap.read()
        if not ok or not _usable(frame):
            raise InferenceError(f"Could not read a frame from camera index {self.profile.index}")
        return frame

    def release(self) -> None:
        self._cap.release()


def _usable(frame) -> bool:
    return frame is not None and getattr(frame, "size", 0) > 0 and len(frame.shape) >= 2


def check_platform() -> None:
    """Raise PlatformUnsupported when OpenCV has no way to talk to a camera."""
    if not hasattr(cv2, "VideoCapture"):
        raise PlatformUnsupported(UNSUPPORTED_MESSAGE)
    registry = getattr(cv2, "videoio_registry", None)
    if registry is not None and not registry.getCameraBackends():
        raise PlatformUnsupported(UNSUPPORTED_MESSAGE)


def default_profile(settings: Settings) -> CaptureProfile:
    return CaptureProfile(name="default", index=settings.CAMERA_INDEX)


def fallback_profile(settings: Settings) -> CaptureProfile:
    return CaptureProfile(
        name="fallback",
        index=settings.CAMERA_FALLBACK_INDEX,
        api_preference=settings.CAMERA_FALLBACK_API,
        width=settings.CAMERA_FALLBACK_WIDTH,
        height=settings.CAMERA_FALLBACK_HEIGHT,
    )


def request_video(profile: CaptureProfile) -> cv2.VideoCapture:
    """
    Open a capture device for the given profile.

    Raises:
        RuntimeError: the device could not be opened.
    """
    logger.debug(f"[capture] request profile={profile.name} index={profile.index} api={profile.api_preference}")
    cap = cv2.VideoCapture(profile.index, profile.api_preference)
    if not cap.isOpened():
        cap.release()
        raise RuntimeError(f"Could not open camera index {profile.index}")
    if profile.width:
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, profile.width)
    if profile.height:
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, profile.height)
    return cap


def _wait_first_frame(cap: cv2.VideoCapture, timeout: float) -> Tuple[int, int]:
    deadline = time.monotonic() + timeout
    while True:
        ok, frame = cap.read()
        if ok and _usable(frame):
            h, w = frame.shape[:2]
            return int(w), int(h)
        if time.monotonic() >= deadline:
            raise RuntimeError(f"No frame from camera within {timeout:.1f}s")
        time.sleep(FIRST_FRAME_POLL)


def open_capture(profile: CaptureProfile, first_frame_timeout: float) -> CaptureHandle:
    cap = request_video(profile)
    try:
        size = _wait_first_frame(cap, first_frame_timeout)
    except Exception:
        cap.release()
        raise
    logger.debug(f"[capture] profile={profile.name} streaming {size[0]}x{size[1]}")
    return CaptureHandle(cap, profile, size)


async def acquire(settings: Settings) -> CaptureHandle:
    """
    Obtain a live capture handle, degrading once to the fallback profile.

    Raises:
        AcquisitionError: both requests failed.
    """
    timeout = settings.FIRST_FRAME_TIMEOUT
    try:
        return await asyncio.to_thread(open_capture, default_profile(settings), timeout)
    except Exception as e:
        logger.warning(f"[capture] default request failed ({e}); retrying with fallback profile")

    try:
        return await asyncio.to_thread(open_capture, fallback_profile(settings), timeout)
    except Exception as e:
        logger.error(f"[capture] fallback request failed ({e})")
        raise AcquisitionError(ACCESS_DENIED_MESSAGE) from e
