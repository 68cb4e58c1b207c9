"""
Pipeline error taxonomy.

Every device or remote call either resolves with a typed payload or fails with
exactly one of the failure kinds below. The rejection kinds (busy, in progress,
invalid transition) never change pipeline state.
"""

ERR_ACCESS_DENIED = "ACCESS_DENIED"
ERR_CAPTURE_FAILED = "CAPTURE_FAILED"
ERR_DETECTION_FAILED = "DETECTION_FAILED"
ERR_EMPTY_RESULT = "EMPTY_RESULT"
ERR_TRANSLATION_FAILED = "TRANSLATION_FAILED"
ERR_BUSY = "BUSY"
ERR_CAPTURE_BUSY = "CAPTURE_BUSY"
ERR_IDENTIFY_IN_PROGRESS = "IDENTIFY_IN_PROGRESS"
ERR_INVALID_TRANSITION = "INVALID_TRANSITION"


class PipelineError(Exception):
    code = "UNKNOWN"

    def __init__(self, message: str = "", cause: BaseException | None = None):
        super().__init__(message or self.code)
        self.message = message or self.code
        self.cause = cause


# ── Failure kinds (stored in Failed) ────────────────────────────────────────

class AccessDenied(PipelineError):
    code = ERR_ACCESS_DENIED


class CaptureError(PipelineError):
    code = ERR_CAPTURE_FAILED


class DetectionError(PipelineError):
    code = ERR_DETECTION_FAILED


class EmptyResult(PipelineError):
    """Detection succeeded but returned no label. Not a fault."""
    code = ERR_EMPTY_RESULT


class TranslationError(PipelineError):
    code = ERR_TRANSLATION_FAILED


# ── Rejections (state untouched) ────────────────────────────────────────────

class PipelineBusy(PipelineError):
    code = ERR_BUSY


class CaptureBusy(PipelineBusy):
    code = ERR_CAPTURE_BUSY


class IdentifyInProgress(PipelineBusy):
    code = ERR_IDENTIFY_IN_PROGRESS


class InvalidTransition(PipelineError):
    code = ERR_INVALID_TRANSITION
