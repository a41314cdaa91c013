import pytest
from moodcam.config import Settings


@pytest.fixture
def fast_settings():
    # no waiting between phases or ticks, no network
    return Settings(
        MODEL_BASE_URL="",
        FIRST_FRAME_TIMEOUT=0.1,
        POLL_INTERVAL=0.0,
        READY_DELAY=0.0,
    )
