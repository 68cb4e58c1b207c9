"""Mock camera: serves a random reference image from a folder, or a synthetic frame."""
import random
from pathlib import Path

import cv2
import numpy as np

from snaptranslate.adapters.camera.base import CameraAdapter
from snaptranslate.orchestrator.contracts import Facing, Illumination


def synthetic_frame(width: int = 320, height: int = 240, seed: int = 0):
    """Deterministic BGR test pattern."""
    rng = np.random.default_rng(seed)
    x = np.linspace(0, 255, width, dtype=np.uint8)
    frame = np.zeros((height, width, 3), dtype=np.uint8)
    frame[:, :, 0] = x
    frame[:, :, 1] = x[::-1]
    frame[:, :, 2] = rng.integers(0, 256, size=(height, 1), dtype=np.uint8)
    return frame


class MockCamera(CameraAdapter):
    def __init__(self, status_store, refs_dir: str | None = None, granted: bool = True):
        self.status = status_store
        self.refs_dir = Path(refs_dir) if refs_dir else None
        self.granted = granted

    async def request_permission(self) -> bool:
        self.status.log(f"mock_camera: permission {'granted' if self.granted else 'denied'}")
        return self.granted

    async def capture_frame(self, facing: Facing, illumination: Illumination):
        jpegs = list(self.refs_dir.glob("*.jpg")) if self.refs_dir else []
        if not jpegs:
            self.status.log(f"mock_camera: synthetic frame ({facing.value}, light {illumination.value})")
            return synthetic_frame()
        chosen = random.choice(jpegs)
        self.status.log(f"mock_camera: serving {chosen.name}")
        return cv2.imread(str(chosen), cv2.IMREAD_COLOR)
