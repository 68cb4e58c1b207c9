from typing import Literal, Optional

from pydantic import BaseModel


class LanguageOut(BaseModel):
    name: str
    code: str


class LanguagesResponse(BaseModel):
    source: LanguageOut
    target: LanguageOut
    choices: list[LanguageOut]


class SelectLanguagesRequest(BaseModel):
    source: Optional[str] = None
    target: Optional[str] = None


class PipelineOut(BaseModel):
    state: Literal["idle", "ready", "identifying", "resolved", "failed"]
    step: Optional[Literal["detecting", "translating"]] = None
    cycle: int
    has_image: bool = False
    label: Optional[str] = None
    translation: Optional[str] = None
    error_code: Optional[str] = None
    error: Optional[str] = None


class StatusResponse(BaseModel):
    access: Literal["unknown", "granted", "denied"]
    facing: Literal["back", "front"]
    illumination: Literal["off", "on"]
    pipeline: PipelineOut
    languages: LanguagesResponse
    last_error: Optional[str] = None
    logs: list[str]


class ActionResponse(BaseModel):
    """Result of a pipeline action. Rejections come back with ok=False, never as HTTP 500."""
    ok: bool
    pipeline: PipelineOut
    error_code: Optional[str] = None
    error: Optional[str] = None


class AccessResponse(BaseModel):
    ok: bool
    access: Literal["unknown", "granted", "denied"]


class ToggleResponse(BaseModel):
    ok: bool
    facing: Literal["back", "front"]
    illumination: Literal["off", "on"]
