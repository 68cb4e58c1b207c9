"""
OpenCV webcam capture adapter.
CAMERA_INDEX / CAMERA_FRONT_INDEX select the back and front devices.
Illumination maps onto the backlight property where the driver supports it.
"""
import asyncio

import cv2

from snaptranslate.adapters.camera.base import CameraAdapter
from snaptranslate.orchestrator.contracts import Facing, Illumination


class CV2Camera(CameraAdapter):
    def __init__(self, status_store, index: int = 0, front_index: int = 1):
        self.status = status_store
        self._indices = {Facing.BACK: index, Facing.FRONT: front_index}
        self._cap = None
        self._open_index = None

    def _open(self, index: int):
        if self._cap is not None and self._open_index != index:
            self.release()
        if self._cap is None or not self._cap.isOpened():
            self._cap = cv2.VideoCapture(index)
            self._open_index = index
            if not self._cap.isOpened():
                self.status.log(f"cv2_camera: failed to open device {index}")

    def _probe(self) -> bool:
        self._open(self._indices[Facing.BACK])
        return self._cap is not None and self._cap.isOpened()

    async def request_permission(self) -> bool:
        # opening the device is what triggers the OS prompt
        return await asyncio.to_thread(self._probe)

    def _read(self, facing: Facing, illumination: Illumination):
        self._open(self._indices[facing])
        if self._cap is None or not self._cap.isOpened():
            return None
        self._cap.set(cv2.CAP_PROP_BACKLIGHT, 1 if illumination == Illumination.ON else 0)
        ret, frame = self._cap.read()
        if not ret or frame is None:
            self.status.log("cv2_camera: frame capture failed")
            return None
        return frame

    async def capture_frame(self, facing: Facing, illumination: Illumination):
        return await asyncio.to_thread(self._read, facing, illumination)

    def release(self):
        if self._cap and self._cap.isOpened():
            self._cap.release()
        self._cap = None
        self._open_index = None
