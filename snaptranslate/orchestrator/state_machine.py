"""
PipelineController: capture → identify (detect, then translate) → resolved.

One live PipelineState, replaced only through transitions.advance(). Each
capture opens a new cycle; every state application is tagged with the cycle
that issued it and dropped if a reset or recapture has moved on since, so late
responses never land on a newer photo.
"""
import asyncio

from snaptranslate.orchestrator import errors
from snaptranslate.orchestrator.contracts import (
    AccessState, LanguagePair, PipelineState, Idle, Identifying, Failed,
)
from snaptranslate.orchestrator.transitions import (
    advance, Captured, CaptureFailed, IdentifyStarted, Detected, Translated, StepFailed, Reset,
)

CALL_TIMEOUT_S = 15.0


class PipelineController:
    def __init__(self, gate, capturer, detector, translator, status_store,
                 languages=None, call_timeout_s: float = CALL_TIMEOUT_S):
        self.gate = gate
        self.capturer = capturer
        self.detector = detector
        self.translator = translator
        self.status = status_store
        self.languages = languages
        self.call_timeout_s = call_timeout_s
        self.state: PipelineState = Idle()
        self._cycle = 0
        self._listeners = []

    @property
    def access(self) -> AccessState:
        return self.gate.state

    @property
    def cycle(self) -> int:
        return self._cycle

    def add_listener(self, fn):
        """fn(state) is called after every applied transition."""
        self._listeners.append(fn)

    def _apply(self, cycle: int, event) -> bool:
        if cycle != self._cycle:
            self.status.log(f"pipeline: dropped stale {type(event).__name__} (cycle {cycle}, now {self._cycle})")
            return False
        prev = self.state
        self.state = advance(prev, event)
        self.status.log(f"pipeline: {prev.name} -> {self.state.name} on {type(event).__name__} (cycle {cycle})")
        if isinstance(self.state, Failed):
            self.status.error(self.state.error_code, f"pipeline: failed {self.state.error_code}: {self.state.reason.message}")
        elif not isinstance(self.state, Identifying):
            self.status.clear_error()
        for fn in self._listeners:
            try:
                fn(self.state)
            except Exception as e:
                self.status.log(f"pipeline: listener error {type(e).__name__}: {e}")
        return True

    # ---- permission ----
    async def request_access(self) -> AccessState:
        return await self.gate.request_access()

    # ---- capture ----
    async def capture(self) -> PipelineState:
        if not self.gate.granted:
            self.status.error(errors.ERR_ACCESS_DENIED, f"pipeline: capture refused, access {self.access.value}")
            raise errors.AccessDenied(f"camera access {self.access.value}")
        if isinstance(self.state, Identifying):
            raise errors.PipelineBusy("identification in flight, reset first")
        if self.capturer.pending:
            raise errors.CaptureBusy("a capture is already pending")

        # a new capture drops whatever photo and results were held
        if not isinstance(self.state, Idle):
            self._apply(self._cycle, Reset())
        self._cycle += 1
        cycle = self._cycle

        try:
            image = await self.capturer.capture(cycle=cycle)
        except errors.CaptureError as e:
            self._apply(cycle, CaptureFailed(e))
            return self.state
        except errors.PipelineBusy:
            raise
        except Exception as e:
            self._apply(cycle, CaptureFailed(errors.CaptureError(f"{type(e).__name__}: {e}", cause=e)))
            return self.state

        self._apply(cycle, Captured(image))
        return self.state

    # ---- identify ----
    async def identify(self, pair: LanguagePair | None = None) -> PipelineState:
        if pair is None:
            if self.languages is None:
                raise ValueError("no LanguagePair given and no language provider configured")
            pair = self.languages.pair()

        cycle = self._cycle
        self._apply(cycle, IdentifyStarted())
        image = self.state.image

        # 1) detect
        try:
            detection = await asyncio.wait_for(self.detector.detect(image), self.call_timeout_s)
        except asyncio.CancelledError:
            self._apply(cycle, StepFailed(errors.DetectionError("cancelled")))
            raise
        except (errors.DetectionError, errors.EmptyResult) as e:
            self._apply(cycle, StepFailed(e))
            return self.state
        except asyncio.TimeoutError as e:
            self._apply(cycle, StepFailed(errors.DetectionError(f"timeout after {self.call_timeout_s}s", cause=e)))
            return self.state
        except Exception as e:
            self._apply(cycle, StepFailed(errors.DetectionError(f"{type(e).__name__}: {e}", cause=e)))
            return self.state

        if not self._apply(cycle, Detected(detection)) or isinstance(self.state, Failed):
            return self.state

        # 2) translate the stripped label held by this cycle
        try:
            translation = await asyncio.wait_for(
                self.translator.translate(self.state.detection.label, pair), self.call_timeout_s
            )
        except asyncio.CancelledError:
            self._apply(cycle, StepFailed(errors.TranslationError("cancelled")))
            raise
        except errors.TranslationError as e:
            self._apply(cycle, StepFailed(e))
            return self.state
        except asyncio.TimeoutError as e:
            self._apply(cycle, StepFailed(errors.TranslationError(f"timeout after {self.call_timeout_s}s", cause=e)))
            return self.state
        except Exception as e:
            self._apply(cycle, StepFailed(errors.TranslationError(f"{type(e).__name__}: {e}", cause=e)))
            return self.state

        self._apply(cycle, Translated(translation))
        return self.state

    # ---- reset ----
    def reset(self) -> PipelineState:
        self._cycle += 1
        self._apply(self._cycle, Reset())
        return self.state

    # ---- device toggles (no effect on pipeline state) ----
    def toggle_facing(self):
        return self.capturer.toggle_facing()

    def toggle_illumination(self):
        return self.capturer.toggle_illumination()
