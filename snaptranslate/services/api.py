"""
HTTP surface for the pipeline. A pure reader of controller state plus thin
endpoints that invoke its operations; no pipeline logic lives here.

Run with:
    uvicorn snaptranslate.services.api:create_app --factory
"""
from contextlib import asynccontextmanager

import cv2
from fastapi import FastAPI, HTTPException
from fastapi.responses import Response

from snaptranslate.orchestrator import errors
from snaptranslate.orchestrator.capturer import Capturer
from snaptranslate.orchestrator.contracts import Idle, Identifying, Resolved, Failed
from snaptranslate.orchestrator.permission import PermissionGate
from snaptranslate.orchestrator.state_machine import PipelineController
from snaptranslate.services.config import Settings
from snaptranslate.services.languages import LanguageSelection
from snaptranslate.services.models import (
    PipelineOut, StatusResponse, ActionResponse, AccessResponse, ToggleResponse,
    LanguageOut, LanguagesResponse, SelectLanguagesRequest,
)
from snaptranslate.services.status_store import StatusStore


def build_controller(settings: Settings, status: StatusStore) -> PipelineController:
    """Wire adapters according to settings (CAMERA_ADAPTER / VISION_ADAPTER / TRANSLATE_ADAPTER)."""
    if settings.camera_adapter == "mock":
        from snaptranslate.adapters.camera.mock_camera import MockCamera
        camera = MockCamera(status, refs_dir=settings.mock_camera_dir)
    else:
        from snaptranslate.adapters.camera.cv2_camera import CV2Camera
        camera = CV2Camera(status, index=settings.camera_index, front_index=settings.camera_front_index)
    status.log(f"camera adapter: {type(camera).__name__}")

    if settings.vision_adapter == "mock":
        from snaptranslate.adapters.vision.mock_vision import MockDetector
        detector = MockDetector(status)
    else:
        from snaptranslate.adapters.vision.google_vision import GoogleVisionDetector
        detector = GoogleVisionDetector(
            status, settings.api_key, url=settings.vision_api_url, timeout=settings.http_timeout_s
        )
    status.log(f"vision adapter: {type(detector).__name__}")

    if settings.translate_adapter == "mock":
        from snaptranslate.adapters.translate.mock_translate import MockTranslator
        translator = MockTranslator(status)
    else:
        from snaptranslate.adapters.translate.google_translate import GoogleTranslator
        translator = GoogleTranslator(
            status, settings.api_key, url=settings.translate_api_url, timeout=settings.http_timeout_s
        )
    status.log(f"translate adapter: {type(translator).__name__}")

    return PipelineController(
        gate=PermissionGate(camera, status),
        capturer=Capturer(camera, status),
        detector=detector,
        translator=translator,
        status_store=status,
        languages=LanguageSelection(settings.source_lang, settings.target_lang),
        # outer bound slightly above the HTTP client's own timeout
        call_timeout_s=settings.http_timeout_s + 1.0,
    )


def pipeline_out(controller: PipelineController) -> PipelineOut:
    st = controller.state
    out = PipelineOut(state=st.name, cycle=controller.cycle, has_image=getattr(st, "image", None) is not None)
    if isinstance(st, Identifying):
        out.step = st.step
        out.label = st.detection.label if st.detection else None
    elif isinstance(st, Resolved):
        out.label = st.detection.label
        out.translation = st.translation.text
    elif isinstance(st, Failed):
        out.error_code = st.error_code
        out.error = st.reason.message
    return out


def languages_out(languages: LanguageSelection) -> LanguagesResponse:
    return LanguagesResponse(
        source=LanguageOut(name=languages.from_lang[0], code=languages.from_lang[1]),
        target=LanguageOut(name=languages.to_lang[0], code=languages.to_lang[1]),
        choices=[LanguageOut(name=n, code=c) for n, c in languages.choices],
    )


def create_app(controller: PipelineController | None = None,
               status: StatusStore | None = None,
               settings: Settings | None = None) -> FastAPI:
    status = status or (controller.status if controller else StatusStore())
    if controller is None:
        controller = build_controller(settings or Settings.from_env(), status)
    if controller.languages is None:
        controller.languages = LanguageSelection()
    languages = controller.languages

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # ask once at startup; afterwards only an explicit POST /permission re-asks
        await controller.request_access()
        yield
        controller.capturer.camera.release()

    app = FastAPI(title="snaptranslate", lifespan=lifespan)
    app.state.controller = controller
    app.state.status = status

    def _action(err: errors.PipelineError | None = None) -> ActionResponse:
        if err is not None:
            return ActionResponse(ok=False, pipeline=pipeline_out(controller), error_code=err.code, error=err.message)
        st = controller.state
        if isinstance(st, Failed):
            return ActionResponse(ok=False, pipeline=pipeline_out(controller), error_code=st.error_code, error=st.reason.message)
        return ActionResponse(ok=True, pipeline=pipeline_out(controller))

    # handlers that touch the controller stay async: they must run on the loop that owns it
    @app.get("/status", response_model=StatusResponse)
    async def get_status():
        return StatusResponse(
            access=controller.access.value,
            facing=controller.capturer.facing.value,
            illumination=controller.capturer.illumination.value,
            pipeline=pipeline_out(controller),
            languages=languages_out(languages),
            last_error=status.last_error,
            logs=status.logs,
        )

    @app.get("/health")
    def health():
        return {
            "api": True,
            "access": controller.access.value,
            "camera": type(controller.capturer.camera).__name__,
            "vision": type(controller.detector).__name__,
            "translate": type(controller.translator).__name__,
        }

    @app.post("/permission", response_model=AccessResponse)
    async def request_permission():
        access = await controller.request_access()
        return AccessResponse(ok=controller.gate.granted, access=access.value)

    @app.post("/capture", response_model=ActionResponse)
    async def capture():
        try:
            await controller.capture()
        except errors.PipelineError as e:
            status.log(f"CAPTURE rejected: {e.code}")
            return _action(err=e)
        return _action()

    @app.post("/identify", response_model=ActionResponse)
    async def identify():
        try:
            await controller.identify()
        except errors.PipelineError as e:
            status.log(f"IDENTIFY rejected: {e.code}")
            return _action(err=e)
        # a reset while in flight leaves us Idle; report what is current
        return _action()

    @app.post("/reset", response_model=ActionResponse)
    async def reset():
        controller.reset()
        return _action()

    @app.post("/toggle/facing", response_model=ToggleResponse)
    async def toggle_facing():
        controller.toggle_facing()
        return ToggleResponse(ok=True, facing=controller.capturer.facing.value,
                              illumination=controller.capturer.illumination.value)

    @app.post("/toggle/illumination", response_model=ToggleResponse)
    async def toggle_illumination():
        controller.toggle_illumination()
        return ToggleResponse(ok=True, facing=controller.capturer.facing.value,
                              illumination=controller.capturer.illumination.value)

    @app.get("/languages", response_model=LanguagesResponse)
    def get_languages():
        return languages_out(languages)

    @app.post("/languages", response_model=LanguagesResponse)
    async def select_languages(req: SelectLanguagesRequest):
        try:
            languages.select(req.source, req.target)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))
        status.log(f"LANGUAGES: {languages.from_lang[1]} → {languages.to_lang[1]}")
        return languages_out(languages)

    @app.post("/languages/swap", response_model=LanguagesResponse)
    async def swap_languages():
        languages.swap()
        status.log(f"LANGUAGES swapped: {languages.from_lang[1]} → {languages.to_lang[1]}")
        return languages_out(languages)

    @app.get("/preview.jpg")
    async def preview():
        image = getattr(controller.state, "image", None)
        if image is None or isinstance(controller.state, Idle):
            raise HTTPException(status_code=404, detail="no photo held")
        ok, buf = cv2.imencode(".jpg", image.display_handle)
        if not ok:
            raise HTTPException(status_code=500, detail="preview encode failed")
        return Response(content=buf.tobytes(), media_type="image/jpeg")

    return app
