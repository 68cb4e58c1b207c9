import random

from snaptranslate.adapters.vision.base import LabelDetector
from snaptranslate.orchestrator.contracts import CapturedImage, DetectionResult

LABELS = ["Banana", "Cup", "Chair", "Book", "Plant"]


class MockDetector(LabelDetector):
    def __init__(self, status_store, label: str | None = None):
        self.status = status_store
        self.label = label

    async def detect(self, image: CapturedImage) -> DetectionResult:
        # Mock: ignore the image
        label = self.label or random.choice(LABELS)
        self.status.log(f"mock_vision: {label}")
        return DetectionResult(label=label)
