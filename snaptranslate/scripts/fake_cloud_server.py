"""
Fake Vision + Translate server for running the pipeline without Google Cloud.

Mimics the two endpoints the adapters call:
  POST /v1/images:annotate            (label detection)
  POST /language/translate/v2         (translation, query params)

A key is required like the real services (any non-empty value). Dark images
(mean brightness < DARK_THRESHOLD) get no label annotations.

Usage:
    python -m snaptranslate.scripts.fake_cloud_server
    VISION_API_URL=http://localhost:9000/v1/images:annotate \
    TRANSLATE_API_URL=http://localhost:9000/language/translate/v2 \
    GOOGLE_CLOUD_API_KEY=dev python -m snaptranslate.scripts.serve
"""
import base64
import binascii

import cv2
import numpy as np
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

DARK_THRESHOLD = 15.0
FAKE_LABEL = "Banana"

TRANSLATIONS = {
    ("banana", "de"): "Banane",
    ("banana", "fr"): "Banane",
    ("banana", "es"): "Pl&aacute;tano",   # escaped, like the real v2 API
    ("banana", "ja"): "バナナ",
}

app = FastAPI(title="fake-cloud-server")


def _error(status: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": {"code": status, "message": message}})


def _label_for(content_b64: str) -> str | None:
    raw = base64.b64decode(content_b64, validate=True)
    img = cv2.imdecode(np.frombuffer(raw, dtype=np.uint8), cv2.IMREAD_GRAYSCALE)
    if img is None:
        raise ValueError("not an image")
    if img.mean() < DARK_THRESHOLD:
        return None
    return FAKE_LABEL


@app.post("/v1/images:annotate")
async def annotate(request: Request):
    if not request.query_params.get("key"):
        return _error(403, "API key missing")
    body = await request.json()
    responses = []
    for req in body.get("requests", []):
        max_results = (req.get("features") or [{}])[0].get("maxResults", 10)
        try:
            label = _label_for(req["image"]["content"])
        except (KeyError, ValueError, binascii.Error) as e:
            responses.append({"error": {"code": 3, "message": f"Bad image data: {e}"}})
            continue
        annotations = [{"description": label, "score": 0.97, "topicality": 0.97}] if label else []
        responses.append({"labelAnnotations": annotations[:max_results]})
        print(f"[vision] label={label!r}")
    return {"responses": responses}


@app.post("/language/translate/v2")
async def translate(request: Request):
    params = request.query_params
    if not params.get("key"):
        return _error(403, "API key missing")
    q, target = params.get("q"), params.get("target")
    if not q or not target:
        return _error(400, "Required Text / target missing")
    text = TRANSLATIONS.get((q.lower(), target), q)
    print(f"[translate] {params.get('source')}→{target} {q!r} -> {text!r}")
    return {"data": {"translations": [{"translatedText": text}]}}


if __name__ == "__main__":
    print("Fake cloud server starting on http://localhost:9000")
    uvicorn.run(app, host="0.0.0.0", port=9000)
