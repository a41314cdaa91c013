"""
FastAPI application entrypoint.
"""
import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api import routes
from moodcam.inference import DeepFaceBackend
from moodcam.loop import start_mood_loop

logging.basicConfig(level=logging.DEBUG)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    task = None
    if routes.settings.AUTOSTART:
        logger.debug("[api] starting mood loop")
        task = asyncio.create_task(
            start_mood_loop(routes.settings, DeepFaceBackend(routes.settings), routes.sink, routes.state)
        )
    yield
    if task is not None:
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        except Exception:
            logger.exception("[api] mood loop ended with an error")
        logger.debug("[api] mood loop stopped")


app = FastAPI(title="MoodCam API", version="1.0.0", lifespan=lifespan)
app.include_router(routes.router)


@app.get("/health")
def health() -> dict:
    """
    Health check endpoint.

    Returns:
        dict: Simple status payload.
    """
    return {"status": "ok"}
