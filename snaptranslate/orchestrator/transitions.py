"""
Pure update function for the pipeline state.

    advance(state, event) -> new state

The controller owns the single live PipelineState and only ever replaces it
with the value returned here. Guards that fail raise InvalidTransition (or
IdentifyInProgress) and leave the caller's state untouched.
"""
from dataclasses import dataclass

from snaptranslate.orchestrator import errors
from snaptranslate.orchestrator.contracts import (
    CapturedImage, DetectionResult, TranslationResult, PipelineState,
    Idle, Ready, Identifying, Resolved, Failed,
)


@dataclass(frozen=True)
class Captured:
    image: CapturedImage


@dataclass(frozen=True)
class CaptureFailed:
    error: errors.CaptureError


@dataclass(frozen=True)
class IdentifyStarted:
    pass


@dataclass(frozen=True)
class Detected:
    detection: DetectionResult


@dataclass(frozen=True)
class Translated:
    translation: TranslationResult


@dataclass(frozen=True)
class StepFailed:
    error: errors.PipelineError


@dataclass(frozen=True)
class Reset:
    pass


def _reject(state: PipelineState, event) -> errors.InvalidTransition:
    return errors.InvalidTransition(f"{type(event).__name__} not allowed in state {state.name}")


def advance(state: PipelineState, event) -> PipelineState:
    if isinstance(event, Reset):
        return Idle()

    if isinstance(event, (Captured, CaptureFailed)):
        if isinstance(state, Identifying):
            raise errors.PipelineBusy("identification in flight, reset first")
        if isinstance(event, Captured):
            return Ready(image=event.image)
        return Failed(reason=event.error)

    if isinstance(event, IdentifyStarted):
        if isinstance(state, Identifying):
            raise errors.IdentifyInProgress("identify already running for this capture")
        if isinstance(state, Ready):
            return Identifying(image=state.image)
        # re-identify after a detection/translation failure keeps the same photo
        if isinstance(state, Failed) and state.image is not None:
            return Identifying(image=state.image)
        raise _reject(state, event)

    if isinstance(event, Detected):
        if not (isinstance(state, Identifying) and state.step == "detecting"):
            raise _reject(state, event)
        label = event.detection.label.strip()
        if not label:
            return Failed(reason=errors.EmptyResult("no label detected"), image=state.image)
        return Identifying(image=state.image, step="translating", detection=DetectionResult(label=label))

    if isinstance(event, Translated):
        if not (isinstance(state, Identifying) and state.step == "translating"):
            raise _reject(state, event)
        return Resolved(image=state.image, detection=state.detection, translation=event.translation)

    if isinstance(event, StepFailed):
        if not isinstance(state, Identifying):
            raise _reject(state, event)
        return Failed(reason=event.error, image=state.image)

    raise TypeError(f"unknown event {event!r}")
