
from moodcam.models import CaptureProfile, FaceResult, MoodView, LoopStatus

def test_models():
    p = CaptureProfile(name="default")
    assert p.index == 0 and p.api_preference == 0 and p.width is None
    f = FaceResult(expressions={"happy": 0.8, "sad": 0.1})
    assert list(f.expressions) == ["happy", "sad"]
    assert MoodView().mood is None
    assert LoopStatus(ready=True, busy=False, capturing=True).ready
