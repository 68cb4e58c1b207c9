"""
Image normalization: raw frame -> (display handle, base64 compressed payload).

Deterministic for a given frame, ratio and format so the network payload size
stays bounded.
"""
import base64

import cv2

_ENCODERS = {
    "jpeg": (".jpg", cv2.IMWRITE_JPEG_QUALITY),
    "webp": (".webp", cv2.IMWRITE_WEBP_QUALITY),
}


def compress(frame, ratio: float, fmt: str = "jpeg") -> tuple:
    if not 0.0 < ratio <= 1.0:
        raise ValueError(f"compression ratio must be in (0, 1], got {ratio}")
    if fmt not in _ENCODERS:
        raise ValueError(f"unsupported output format: {fmt}")
    if frame is None or getattr(frame, "size", 0) == 0:
        raise ValueError("empty frame")

    ext, quality_flag = _ENCODERS[fmt]
    ok, buf = cv2.imencode(ext, frame, [quality_flag, int(round(ratio * 100))])
    if not ok:
        raise ValueError(f"cv2.imencode failed for {fmt}")
    return frame, base64.standard_b64encode(buf.tobytes()).decode("ascii")
