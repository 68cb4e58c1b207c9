"""
Capturer: one frame from the camera adapter, normalized into a compressed
still plus a display handle.

Compression is fixed (JPEG at 0.65) so detection payloads stay small and the
output is deterministic for a given frame.
"""
import asyncio

from snaptranslate.adapters.camera.normalize import compress
from snaptranslate.orchestrator import errors
from snaptranslate.orchestrator.contracts import (
    CapturedImage, QualityParams, Facing, Illumination,
)

COMPRESSION_RATIO = 0.65
OUTPUT_FORMAT = "jpeg"


class Capturer:
    def __init__(self, camera, status_store, compress_fn=compress):
        self.camera = camera
        self.status = status_store
        self.compress = compress_fn
        self.quality = QualityParams(target_format=OUTPUT_FORMAT, compression_ratio=COMPRESSION_RATIO)
        self.facing = Facing.BACK
        self.illumination = Illumination.OFF
        self._pending = False

    @property
    def pending(self) -> bool:
        return self._pending

    def toggle_facing(self) -> Facing:
        self.facing = Facing.FRONT if self.facing == Facing.BACK else Facing.BACK
        self.status.log(f"capturer: facing -> {self.facing.value}")
        return self.facing

    def toggle_illumination(self) -> Illumination:
        self.illumination = Illumination.ON if self.illumination == Illumination.OFF else Illumination.OFF
        self.status.log(f"capturer: illumination -> {self.illumination.value}")
        return self.illumination

    async def capture(self, cycle: int = 0) -> CapturedImage:
        if self._pending:
            raise errors.CaptureBusy("a capture is already pending")

        self._pending = True
        # settings are read once; toggles during the await only affect the next capture
        facing, illumination = self.facing, self.illumination
        try:
            try:
                frame = await self.camera.capture_frame(facing, illumination)
            except Exception as e:
                raise errors.CaptureError(f"camera unavailable: {e}", cause=e) from e
            if frame is None:
                raise errors.CaptureError("camera returned no frame")

            try:
                handle, payload = await asyncio.to_thread(
                    self.compress, frame, self.quality.compression_ratio, self.quality.target_format
                )
            except Exception as e:
                raise errors.CaptureError(f"compression failed: {e}", cause=e) from e
            if not payload:
                raise errors.CaptureError("compression produced an empty payload")

            self.status.log(
                f"capturer: captured {len(payload)} b64 chars "
                f"({self.quality.target_format}@{self.quality.compression_ratio})"
            )
            return CapturedImage(
                display_handle=handle,
                encoded_payload=payload,
                quality_params=self.quality,
                cycle=cycle,
                facing=facing,
                illumination=illumination,
            )
        finally:
            self._pending = False
