"""
Read-only endpoints over the mood loop's display slots.
"""
import logging

from fastapi import APIRouter

from moodcam.config import Settings
from moodcam.loop import MoodState
from moodcam.models import LoopStatus, MoodView
from moodcam.sinks import MemorySink

router = APIRouter()
settings = Settings()
sink = MemorySink()
state = MoodState()
logger = logging.getLogger(__name__)


@router.get("/mood", response_model=MoodView)
async def mood() -> MoodView:
    """
    Latest status message (None once polling runs) and latest mood label.
    """
    return sink.view()


@router.get("/loop/status", response_model=LoopStatus)
async def loop_status() -> LoopStatus:
    return LoopStatus(ready=state.ready, busy=state.busy, capturing=state.capture is not None)
