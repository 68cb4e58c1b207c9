from snaptranslate.orchestrator.contracts import CapturedImage, DetectionResult


class LabelDetector:
    async def detect(self, image: CapturedImage) -> DetectionResult:
        """Top label for the image. Raises DetectionError or EmptyResult."""
        raise NotImplementedError
