"""
Expression scores -> display mood.
"""
from __future__ import annotations
from typing import Dict, Mapping

EXPRESSION_LABELS = ("happy", "sad", "angry", "surprised", "fearful", "disgusted", "neutral")

MOOD_MAP = {
    "happy": "Happy",
    "sad": "Sad",
    "angry": "Angry",
    "surprised": "Surprised",
    "fearful": "Fearful",
    "disgusted": "Disgusted",
    "neutral": "Neutral",
}
DEFAULT_MOOD = "Neutral"

NO_FACE_MESSAGE = "No face detected"
DETECTION_ERROR_MESSAGE = "Detection error"

# DeepFace emotion keys -> our label set
DEEPFACE_LABELS = {
    "angry": "angry",
    "disgust": "disgusted",
    "fear": "fearful",
    "happy": "happy",
    "sad": "sad",
    "surprise": "surprised",
    "neutral": "neutral",
}


def dominant_expression(scores: Mapping[str, float]) -> str:
    """
    Label with strictly the highest score, first one wins on ties.

    Returns "" when no score is above zero.
    """
    best_label = ""
    best_value = 0.0
    for label, value in scores.items():
        if value > best_value:
            best_value = value
            best_label = label
    return best_label


def mood_from_expressions(scores: Mapping[str, float]) -> str:
    return MOOD_MAP.get(dominant_expression(scores), DEFAULT_MOOD)


def scores_from_deepface(raw: Mapping[str, float]) -> Dict[str, float]:
    """
    Convert a DeepFace ``emotion`` dict (percentages, DeepFace names) into
    expression scores in [0, 1], ordered like EXPRESSION_LABELS.

    Unknown keys are kept after the known ones.
    """
    renamed: Dict[str, float] = {}
    for key, value in (raw or {}).items():
        try:
            v = float(value) / 100.0
        except (TypeError, ValueError):
            continue
        renamed[DEEPFACE_LABELS.get(key, key)] = min(1.0, max(0.0, v))

    scores = {label: renamed[label] for label in EXPRESSION_LABELS if label in renamed}
    for label, value in renamed.items():
        scores.setdefault(label, value)
    return scores
