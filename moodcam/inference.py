# moodcam/inference.py
"""
Model collaborator: loading the four sub-models and running one inference pass.

DeepFace does the actual work. It is imported lazily so tests can swap in a
fake module through sys.modules and so TensorFlow is not pulled in at import.
"""
from __future__ import annotations

import asyncio
import logging
import os
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Tuple

import numpy as np
import requests

from moodcam.config import Settings
from moodcam.emotion import scores_from_deepface
from moodcam.errors import ModelLoadError
from moodcam.models import FaceRegion, FaceResult

logger = logging.getLogger(__name__)

MODEL_LOAD_MESSAGE = "Failed to load AI models. Please check your internet connection."


class ModelKind(str, Enum):
    FACE_DETECTOR = "face_detector"
    FACE_LANDMARKS = "face_landmarks"
    FACE_RECOGNITION = "face_recognition"
    FACE_EXPRESSION = "face_expression"


# kind -> (DeepFace task, DeepFace model name, weights artifact or None)
DEEPFACE_MODELS: Dict[ModelKind, Tuple[str, str, Optional[str]]] = {
    ModelKind.FACE_DETECTOR: ("face_detector", "opencv", None),  # ships with cv2
    ModelKind.FACE_LANDMARKS: ("face_detector", "retinaface", "retinaface.h5"),
    ModelKind.FACE_RECOGNITION: ("facial_recognition", "Facenet", "facenet_weights.h5"),
    ModelKind.FACE_EXPRESSION: ("facial_attribute", "Emotion", "facial_expression_model_weights.h5"),
}


class ModelBackend(Protocol):
    def load_model(self, kind: ModelKind, source_location: str) -> None:
        ...

    def infer(self, frame: np.ndarray) -> List[FaceResult]:
        ...


def weights_dir() -> Path:
    """Directory DeepFace reads its weights from."""
    home = os.getenv("DEEPFACE_HOME") or str(Path.home())
    return Path(home) / ".deepface" / "weights"


def fetch_artifact(name: str, base_url: str, timeout: float = 60.0) -> Path:
    """
    Download one weights file from base_url into the DeepFace weights directory.

    Files already present are left alone; DeepFace would skip them as well.

    Raises:
        requests.RequestException: download failed.
    """
    dest = weights_dir() / name
    if dest.exists():
        logger.debug(f"[models] artifact present: {dest}")
        return dest
    dest.parent.mkdir(parents=True, exist_ok=True)
    url = base_url + name
    logger.debug(f"[models] fetching {url} -> {dest}")
    tmp = dest.with_suffix(dest.suffix + ".part")
    try:
        with requests.get(url, stream=True, timeout=timeout) as resp:
            resp.raise_for_status()
            with open(tmp, "wb") as f:
                for chunk in resp.iter_content(chunk_size=1 << 20):
                    f.write(chunk)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    tmp.replace(dest)
    return dest


class DeepFaceBackend:
    """ModelBackend backed by DeepFace."""

    def __init__(self, settings: Settings):
        self.s = settings
        self.models: Dict[ModelKind, object] = {}

    def load_model(self, kind: ModelKind, source_location: str) -> None:
        task, name, artifact = DEEPFACE_MODELS[kind]
        if artifact and source_location:
            fetch_artifact(artifact, source_location, timeout=self.s.MODEL_FETCH_TIMEOUT)
        from deepface import DeepFace
        logger.debug(f"[models] build kind={kind.value} task={task} model={name}")
        self.models[kind] = DeepFace.build_model(model_name=name, task=task)

    def infer(self, frame: np.ndarray) -> List[FaceResult]:
        from deepface import DeepFace
        res = DeepFace.analyze(
            frame,
            actions=["emotion"],
            enforce_detection=False,
            detector_backend=self.s.DETECTOR_BACKEND,
            align=True,
            silent=True,
        )
        # DeepFace returns list[dict] or dict depending on version; normalize to list
        res = res if isinstance(res, list) else [res]

        faces: List[FaceResult] = []
        for r in res:
            r = r or {}
            # With enforce_detection=False a frame without faces still yields
            # one whole-frame entry, marked by a zero confidence.
            conf = r.get("face_confidence")
            if conf is not None and float(conf) <= 0.0:
                continue
            reg = r.get("region") or {}
            faces.append(FaceResult(
                expressions=scores_from_deepface(r.get("emotion") or {}),
                region=FaceRegion(
                    x=int(reg.get("x", 0)), y=int(reg.get("y", 0)),
                    w=int(reg.get("w", 0)), h=int(reg.get("h", 0)),
                ),
            ))
        return faces


async def load_models(backend: ModelBackend, settings: Settings) -> None:
    """
    Load every ModelKind concurrently; all must succeed.

    Raises:
        ModelLoadError: any single load failed.
    """
    kinds = list(ModelKind)
    logger.debug(f"[models] loading {len(kinds)} models from {settings.MODEL_BASE_URL or '<deepface default>'}")
    results = await asyncio.gather(
        *(asyncio.to_thread(backend.load_model, kind, settings.MODEL_BASE_URL) for kind in kinds),
        return_exceptions=True,
    )
    failures = [(k, r) for k, r in zip(kinds, results) if isinstance(r, BaseException)]
    for kind, err in failures:
        logger.error(f"[models] {kind.value} failed: {err!r}")
    if failures:
        raise ModelLoadError(MODEL_LOAD_MESSAGE) from failures[0][1]
    logger.debug("[models] all models ready")
