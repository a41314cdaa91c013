"""
Pydantic data models shared by the loop and the API.
"""
from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Dict, Optional


class CaptureProfile(BaseModel):
    """One camera request: device index, OpenCV backend and optional size hints."""
    name: str
    index: int = 0
    api_preference: int = 0  # cv2.CAP_ANY
    width: Optional[int] = None
    height: Optional[int] = None


class FaceRegion(BaseModel):
    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0


class FaceResult(BaseModel):
    # Iteration order of `expressions` is the tie-break order
    expressions: Dict[str, float] = Field(default_factory=dict)
    region: Optional[FaceRegion] = None


# api models


class MoodView(BaseModel):
    status: Optional[str] = None
    mood: Optional[str] = None


class LoopStatus(BaseModel):
    ready: bool
    busy: bool
    capturing: bool
