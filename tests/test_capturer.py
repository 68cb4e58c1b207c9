"""Tests for Capturer and image normalization."""

import asyncio
import base64

import numpy as np
import pytest

from snaptranslate.adapters.camera.mock_camera import MockCamera, synthetic_frame
from snaptranslate.adapters.camera.normalize import compress
from snaptranslate.orchestrator import errors
from snaptranslate.orchestrator.capturer import Capturer, COMPRESSION_RATIO
from snaptranslate.orchestrator.contracts import Facing, Illumination

from conftest import FakeCamera


class TestCompress:
    def test_jpeg_payload(self):
        frame = synthetic_frame()
        handle, payload = compress(frame, 0.65, "jpeg")
        raw = base64.b64decode(payload)
        assert raw[:3] == b"\xff\xd8\xff"
        assert handle is frame

    def test_deterministic(self):
        frame = synthetic_frame(seed=3)
        assert compress(frame, 0.65)[1] == compress(frame.copy(), 0.65)[1]

    def test_lower_ratio_gives_smaller_payload(self):
        frame = synthetic_frame(seed=7)
        assert len(compress(frame, 0.2)[1]) < len(compress(frame, 0.95)[1])

    @pytest.mark.parametrize("ratio", [0.0, -0.1, 1.5])
    def test_invalid_ratio(self, ratio):
        with pytest.raises(ValueError):
            compress(synthetic_frame(), ratio)

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            compress(synthetic_frame(), 0.65, "bmp")

    def test_empty_frame(self):
        with pytest.raises(ValueError):
            compress(np.zeros((0, 0, 3), dtype=np.uint8), 0.65)


class TestCapturer:
    def test_capture_produces_compressed_image(self, status):
        capturer = Capturer(FakeCamera(), status)
        image = asyncio.run(capturer.capture(cycle=4))
        assert image.encoded_payload
        assert image.quality_params.compression_ratio == COMPRESSION_RATIO == 0.65
        assert image.quality_params.target_format == "jpeg"
        assert image.cycle == 4
        assert not capturer.pending

    def test_payload_non_empty_across_frames(self, status):
        camera = FakeCamera()
        capturer = Capturer(camera, status)
        for seed in range(5):
            camera.frame = synthetic_frame(seed=seed)
            image = asyncio.run(capturer.capture())
            assert image.encoded_payload
            assert image.quality_params.compression_ratio == COMPRESSION_RATIO

    def test_toggles_are_idempotent_pairs(self, status):
        capturer = Capturer(FakeCamera(), status)
        facing, light = capturer.facing, capturer.illumination
        capturer.toggle_facing()
        assert capturer.facing != facing
        capturer.toggle_facing()
        assert capturer.facing == facing
        capturer.toggle_illumination()
        assert capturer.illumination == Illumination.ON
        capturer.toggle_illumination()
        assert capturer.illumination == light == Illumination.OFF

    def test_toggles_apply_to_next_capture(self, status):
        camera = FakeCamera()
        capturer = Capturer(camera, status)
        capturer.toggle_facing()
        capturer.toggle_illumination()
        image = asyncio.run(capturer.capture())
        assert camera.calls == [(Facing.FRONT, Illumination.ON)]
        assert (image.facing, image.illumination) == (Facing.FRONT, Illumination.ON)

    def test_toggle_during_capture_does_not_affect_it(self, status):
        camera = FakeCamera()
        capturer = Capturer(camera, status)

        async def scenario():
            camera.hold = asyncio.Event()
            task = asyncio.create_task(capturer.capture())
            await asyncio.sleep(0)
            capturer.toggle_facing()
            camera.hold.set()
            return await task

        image = asyncio.run(scenario())
        assert image.facing == Facing.BACK
        assert capturer.facing == Facing.FRONT

    def test_device_error_becomes_capture_error(self, status):
        capturer = Capturer(FakeCamera(error=OSError("device busy")), status)
        with pytest.raises(errors.CaptureError, match="device busy"):
            asyncio.run(capturer.capture())
        assert not capturer.pending

    def test_missing_frame_is_capture_error(self, status):
        camera = FakeCamera()
        camera.frame = None
        with pytest.raises(errors.CaptureError):
            asyncio.run(Capturer(camera, status).capture())

    def test_compression_failure_is_capture_error(self, status):
        def broken(frame, ratio, fmt):
            raise RuntimeError("codec missing")

        with pytest.raises(errors.CaptureError, match="codec missing"):
            asyncio.run(Capturer(FakeCamera(), status, compress_fn=broken).capture())

    def test_empty_payload_is_capture_error(self, status):
        with pytest.raises(errors.CaptureError):
            asyncio.run(Capturer(FakeCamera(), status, compress_fn=lambda f, r, fmt: (f, "")).capture())

    def test_second_capture_while_pending_rejected(self, status):
        camera = FakeCamera()
        capturer = Capturer(camera, status)

        async def scenario():
            camera.hold = asyncio.Event()
            first = asyncio.create_task(capturer.capture())
            await asyncio.sleep(0)
            with pytest.raises(errors.CaptureBusy):
                await capturer.capture()
            camera.hold.set()
            return await first

        image = asyncio.run(scenario())
        assert image.encoded_payload
        assert len(camera.calls) == 1


class TestMockCamera:
    def test_synthetic_when_no_refs(self, status):
        frame = asyncio.run(MockCamera(status).capture_frame(Facing.BACK, Illumination.OFF))
        assert frame.shape == (240, 320, 3)

    def test_permission_flag(self, status):
        assert asyncio.run(MockCamera(status, granted=False).request_permission()) is False
