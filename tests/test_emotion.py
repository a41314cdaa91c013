from moodcam.emotion import (
    EXPRESSION_LABELS, dominant_expression, mood_from_expressions, scores_from_deepface,
)


def test_tie_keeps_first_seen_label():
    scores = {"happy": 0.2, "sad": 0.9, "angry": 0.9, "neutral": 0.1}
    assert dominant_expression(scores) == "sad"
    assert mood_from_expressions(scores) == "Sad"


def test_every_label_maps_to_display_string():
    for label in EXPRESSION_LABELS:
        assert mood_from_expressions({label: 1.0}) == label.capitalize()


def test_unknown_label_falls_back_to_neutral():
    assert mood_from_expressions({"contempt": 0.95, "happy": 0.1}) == "Neutral"


def test_all_zero_scores_fall_back_to_neutral():
    scores = {label: 0.0 for label in EXPRESSION_LABELS}
    assert dominant_expression(scores) == ""
    assert mood_from_expressions(scores) == "Neutral"
    assert mood_from_expressions({}) == "Neutral"


def test_scores_from_deepface():
    raw = {"neutral": 5.0, "angry": 1.0, "disgust": 0.5, "fear": 2.5,
           "happy": 80.0, "sad": 10.0, "surprise": 1.0}
    scores = scores_from_deepface(raw)
    assert list(scores) == list(EXPRESSION_LABELS)
    assert scores["happy"] == 0.8
    assert scores["disgusted"] == 0.005
    assert all(0.0 <= v <= 1.0 for v in scores.values())
    assert mood_from_expressions(scores) == "Happy"
