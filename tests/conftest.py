"""Shared fakes for pipeline tests."""

import asyncio
from types import SimpleNamespace

import pytest

from snaptranslate.adapters.camera.base import CameraAdapter
from snaptranslate.adapters.camera.mock_camera import synthetic_frame
from snaptranslate.adapters.translate.base import Translator
from snaptranslate.adapters.vision.base import LabelDetector
from snaptranslate.orchestrator.capturer import Capturer
from snaptranslate.orchestrator.contracts import AccessState, DetectionResult, TranslationResult, LanguagePair
from snaptranslate.orchestrator.permission import PermissionGate
from snaptranslate.orchestrator.state_machine import PipelineController
from snaptranslate.services.languages import LanguageSelection
from snaptranslate.services.status_store import StatusStore

EN_DE = LanguagePair(source_code="en", target_code="de")


class FakeCamera(CameraAdapter):
    def __init__(self, granted=True, frame=None, error=None):
        self.granted = granted
        self.frame = synthetic_frame() if frame is None else frame
        self.error = error
        self.hold = None            # asyncio.Event; capture waits on it when set
        self.calls = []
        self.permission_calls = 0
        self.released = False

    async def request_permission(self):
        self.permission_calls += 1
        return self.granted

    async def capture_frame(self, facing, illumination):
        self.calls.append((facing, illumination))
        if self.hold is not None:
            await self.hold.wait()
        if self.error is not None:
            raise self.error
        return self.frame

    def release(self):
        self.released = True


class ScriptedDetector(LabelDetector):
    def __init__(self, label="Banana", error=None, trace=None):
        self.label = label
        self.error = error
        self.hold = None
        self.delay = 0.0
        self.calls = []
        self.trace = trace if trace is not None else []

    async def detect(self, image):
        self.calls.append(image)
        self.trace.append(("detect:start", image.cycle))
        if self.hold is not None:
            await self.hold.wait()
        if self.delay:
            await asyncio.sleep(self.delay)
        self.trace.append(("detect:end", image.cycle))
        if self.error is not None:
            raise self.error
        return DetectionResult(label=self.label)


class ScriptedTranslator(Translator):
    def __init__(self, text="Banane", error=None, trace=None):
        self.text = text
        self.error = error
        self.hold = None
        self.delay = 0.0
        self.calls = []
        self.trace = trace if trace is not None else []

    async def translate(self, label, pair):
        self.calls.append((label, pair))
        self.trace.append(("translate:start", label))
        if self.hold is not None:
            await self.hold.wait()
        if self.delay:
            await asyncio.sleep(self.delay)
        self.trace.append(("translate:end", label))
        if self.error is not None:
            raise self.error
        return TranslationResult(text=self.text)


@pytest.fixture
def status():
    return StatusStore()


@pytest.fixture
def make_pipeline(status):
    """Build a controller wired to fakes. Access is pre-granted unless granted=False."""

    def _make(granted=True, camera=None, detector=None, translator=None, call_timeout_s=5.0):
        trace = []
        camera = camera or FakeCamera(granted=granted)
        detector = detector or ScriptedDetector(trace=trace)
        translator = translator or ScriptedTranslator(trace=trace)
        detector.trace = translator.trace = trace
        gate = PermissionGate(camera, status)
        if granted:
            gate.state = AccessState.GRANTED
        controller = PipelineController(
            gate=gate,
            capturer=Capturer(camera, status),
            detector=detector,
            translator=translator,
            status_store=status,
            languages=LanguageSelection("en", "de"),
            call_timeout_s=call_timeout_s,
        )
        seen = []
        controller.add_listener(seen.append)
        return SimpleNamespace(
            controller=controller, camera=camera, detector=detector,
            translator=translator, status=status, trace=trace, seen=seen,
        )

    return _make
