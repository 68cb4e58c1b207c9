"""
Google Cloud Vision label detector.

POSTs the compressed still to images:annotate asking for the single top
LABEL_DETECTION result. The API key travels as the `key` query parameter.

    request:  {"requests": [{"image": {"content": <b64>},
                             "features": [{"type": "LABEL_DETECTION", "maxResults": 1}]}]}
    response: {"responses": [{"labelAnnotations": [{"description": "Banana", ...}]}]}
"""
import httpx

from snaptranslate.adapters.vision.base import LabelDetector
from snaptranslate.orchestrator import errors
from snaptranslate.orchestrator.contracts import CapturedImage, DetectionResult
from snaptranslate.services.config import VISION_API_URL

MAX_RESULTS = 1


def build_request(payload_b64: str) -> dict:
    return {
        "requests": [
            {
                "image": {"content": payload_b64},
                "features": [{"type": "LABEL_DETECTION", "maxResults": MAX_RESULTS}],
            }
        ]
    }


def parse_label(data: dict) -> str:
    """Extract responses[0].labelAnnotations[0].description.

    A per-image error object is a service failure; a missing annotation is an
    empty (but valid) answer.
    """
    try:
        first = data["responses"][0]
    except (KeyError, IndexError, TypeError) as e:
        raise errors.DetectionError("malformed response: no responses[0]", cause=e) from e
    if not isinstance(first, dict):
        raise errors.DetectionError("malformed response: responses[0] is not an object")

    if first.get("error"):
        msg = first["error"].get("message", "unknown") if isinstance(first["error"], dict) else first["error"]
        raise errors.DetectionError(f"service error: {msg}")

    annotations = first.get("labelAnnotations") or []
    if not annotations:
        raise errors.EmptyResult("no label annotations")
    if not isinstance(annotations, list) or not isinstance(annotations[0], dict):
        raise errors.DetectionError("malformed response: labelAnnotations")
    label = (annotations[0].get("description") or "").strip()
    if not label:
        raise errors.EmptyResult("top annotation has no description")
    return label


class GoogleVisionDetector(LabelDetector):
    def __init__(self, status_store, api_key: str | None, url: str = VISION_API_URL,
                 timeout: float = 15.0, client: httpx.AsyncClient | None = None):
        self.status = status_store
        self.api_key = api_key
        self.url = url
        self.timeout = timeout
        self._client = client
        if not api_key:
            self.status.log("google_vision: GOOGLE_CLOUD_API_KEY not set")

    async def _post(self, body: dict) -> httpx.Response:
        params = {"key": self.api_key} if self.api_key else None
        if self._client is not None:
            return await self._client.post(self.url, params=params, json=body, timeout=self.timeout)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(self.url, params=params, json=body)

    async def detect(self, image: CapturedImage) -> DetectionResult:
        self.status.log(f"google_vision: POST images:annotate (cycle={image.cycle})")
        try:
            resp = await self._post(build_request(image.encoded_payload))
        except httpx.TimeoutException as e:
            raise errors.DetectionError(f"timeout after {self.timeout}s", cause=e) from e
        except httpx.HTTPError as e:
            raise errors.DetectionError(f"transport error: {e}", cause=e) from e

        if not resp.is_success:
            self.status.log(f"google_vision: HTTP {resp.status_code} — {resp.text[:300]}")
            raise errors.DetectionError(f"HTTP {resp.status_code}")
        try:
            data = resp.json()
        except ValueError as e:
            raise errors.DetectionError("response is not JSON", cause=e) from e

        label = parse_label(data)
        self.status.log(f"google_vision: → {label}")
        return DetectionResult(label=label)
