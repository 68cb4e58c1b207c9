from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, Optional, Union

from snaptranslate.orchestrator.errors import PipelineError


class AccessState(str, Enum):
    UNKNOWN = "unknown"
    GRANTED = "granted"
    DENIED = "denied"


class Facing(str, Enum):
    BACK = "back"
    FRONT = "front"


class Illumination(str, Enum):
    OFF = "off"
    ON = "on"


@dataclass(frozen=True)
class QualityParams:
    target_format: str          # e.g. "jpeg"
    compression_ratio: float    # 0 < ratio <= 1


@dataclass(frozen=True, eq=False)
class CapturedImage:
    display_handle: Any         # BGR frame, renderable as-is
    encoded_payload: str        # base64 of the compressed still
    quality_params: QualityParams
    cycle: int = 0
    facing: Facing = Facing.BACK
    illumination: Illumination = Illumination.OFF


@dataclass(frozen=True)
class LanguagePair:
    source_code: str
    target_code: str


@dataclass(frozen=True)
class DetectionResult:
    label: str


@dataclass(frozen=True)
class TranslationResult:
    text: str


# ── Pipeline states ─────────────────────────────────────────────────────────

IdentifyStep = Literal["detecting", "translating"]


@dataclass(frozen=True)
class Idle:
    name: str = field(default="idle", init=False)


@dataclass(frozen=True)
class Ready:
    image: CapturedImage
    name: str = field(default="ready", init=False)


@dataclass(frozen=True)
class Identifying:
    image: CapturedImage
    step: IdentifyStep = "detecting"
    # only set once detection has succeeded (step == "translating")
    detection: Optional[DetectionResult] = None
    name: str = field(default="identifying", init=False)


@dataclass(frozen=True)
class Resolved:
    image: CapturedImage
    detection: DetectionResult
    translation: TranslationResult
    name: str = field(default="resolved", init=False)


@dataclass(frozen=True)
class Failed:
    reason: PipelineError
    image: Optional[CapturedImage] = None   # None when the capture itself failed
    name: str = field(default="failed", init=False)

    @property
    def error_code(self) -> str:
        return self.reason.code


PipelineState = Union[Idle, Ready, Identifying, Resolved, Failed]
