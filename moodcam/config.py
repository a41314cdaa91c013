"""
Configuration for the mood loop.
"""
from pydantic import BaseModel
import os


def _env_flag(name: str, default: str) -> bool:
    return (os.getenv(name, default) or default).strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    """
    Runtime settings with environment-variable overrides.
    """
    MODEL_BASE_URL: str = os.getenv(
        "MODEL_BASE_URL",
        "https://github.com/serengil/deepface_models/releases/download/v1.0/",
    )
    MODEL_FETCH_TIMEOUT: float = float(os.getenv("MODEL_FETCH_TIMEOUT", "60"))
    DETECTOR_BACKEND: str = os.getenv("DETECTOR_BACKEND", "opencv")

    CAMERA_INDEX: int = int(os.getenv("CAMERA_INDEX", "0"))
    CAMERA_FALLBACK_INDEX: int = int(os.getenv("CAMERA_FALLBACK_INDEX", "0"))
    CAMERA_FALLBACK_API: int = int(os.getenv("CAMERA_FALLBACK_API", "0"))
    CAMERA_FALLBACK_WIDTH: int = int(os.getenv("CAMERA_FALLBACK_WIDTH", "640"))
    CAMERA_FALLBACK_HEIGHT: int = int(os.getenv("CAMERA_FALLBACK_HEIGHT", "480"))
    FIRST_FRAME_TIMEOUT: float = float(os.getenv("FIRST_FRAME_TIMEOUT", "5"))

    POLL_INTERVAL: float = float(os.getenv("POLL_INTERVAL", "0.5"))
    READY_DELAY: float = float(os.getenv("READY_DELAY", "1.0"))
    AUTOSTART: bool = _env_flag("AUTOSTART", "true")

    def __init__(self, **data):
        super().__init__(**data)
        # Timers can't run backwards
        for name in ("POLL_INTERVAL", "READY_DELAY", "FIRST_FRAME_TIMEOUT"):
            object.__setattr__(self, name, max(0.0, float(getattr(self, name))))
        base = (self.MODEL_BASE_URL or "").strip()
        if base and not base.endswith("/"):
            base += "/"
        object.__setattr__(self, "MODEL_BASE_URL", base)
