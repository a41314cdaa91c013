
from fastapi.testclient import TestClient
from api.main import app
import api.routes as routes
from moodcam.loop import MoodState
from moodcam.sinks import MemorySink


def test_health():
    client = TestClient(app)
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_mood_reflects_sink(monkeypatch):
    sink = MemorySink()
    monkeypatch.setattr(routes, "sink", sink)
    client = TestClient(app)

    sink.show_status("Loading AI models...")
    assert client.get("/mood").json() == {"status": "Loading AI models...", "mood": None}

    sink.show_status(None)
    sink.show_mood("Happy")
    assert client.get("/mood").json() == {"status": None, "mood": "Happy"}


def test_loop_status(monkeypatch):
    monkeypatch.setattr(routes, "state", MoodState(ready=True))
    client = TestClient(app)
    r = client.get("/loop/status")
    assert r.status_code == 200
    assert r.json() == {"ready": True, "busy": False, "capturing": False}


def test_shutdown_survives_crashed_mood_loop(monkeypatch):
    import threading
    import api.main as main
    from moodcam.config import Settings

    ran = threading.Event()

    async def crashing_loop(*args, **kwargs):
        ran.set()
        raise RuntimeError("camera driver crashed")

    monkeypatch.setattr(routes, "settings", Settings(AUTOSTART=True))
    monkeypatch.setattr(main, "start_mood_loop", crashing_loop)

    with TestClient(app) as client:
        assert ran.wait(2)
        assert client.get("/health").status_code == 200
    # leaving the block ran shutdown without re-raising the loop's error
