from contextlib import asynccontextmanager
from fastapi import FastAPI
from organlens.orchestrator.contracts import CaptureOutcome, ClassificationResult, Display
from organlens.orchestrator.state_machine import CaptureController
from organlens.services.models import (
    DisplayOut, IntentResponse, PermissionResponse, ResultOut, StatusResponse,
)
from organlens.services.status_store import StatusStore


def _result_out(r: ClassificationResult | None) -> ResultOut | None:
    return ResultOut(label=r.label, description=r.description) if r else None


def display_out(d: Display) -> DisplayOut:
    if d.kind == "loading":
        return DisplayOut(kind="loading", text=d.text)
    if d.kind == "result":
        return DisplayOut(kind="result", result=_result_out(d.result))
    if d.kind == "error":
        return DisplayOut(kind="error", text=d.message)
    return DisplayOut(kind="empty")


def create_app(controller: CaptureController, status: StatusStore, permission) -> FastAPI:
    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        yield
        controller.shutdown()

    app = FastAPI(title="organlens", lifespan=lifespan)
    session = controller.session

    def _intent(o: CaptureOutcome) -> IntentResponse:
        return IntentResponse(
            ok=o.ok, error_code=o.error_code, duration_ms=o.duration_ms,
            result=_result_out(o.result), recording=o.recording,
            display=display_out(session.display),
        )

    @app.get("/status", response_model=StatusResponse)
    def get_status():
        return StatusResponse(
            mode=session.mode,
            facing=session.facing,
            recording=session.recording,
            busy=session.busy,
            phase=controller.phase,
            permission_granted=permission.has_permission(),
            display=display_out(session.display),
            last_error_code=status.last_error_code,
            last_duration_ms=status.last_duration_ms,
            logs=status.logs,
        )

    @app.post("/shutter", response_model=IntentResponse)
    def shutter():
        """Shutter button: still capture + classify, or record start/stop in video mode."""
        status.log("SHUTTER")
        return _intent(controller.shutter())

    @app.post("/capture", response_model=IntentResponse)
    def capture():
        status.log("CAPTURE")
        return _intent(controller.take_picture())

    @app.post("/record", response_model=IntentResponse)
    def record():
        status.log("RECORD")
        return _intent(controller.toggle_recording())

    @app.post("/toggle_mode", response_model=IntentResponse)
    def toggle_mode():
        return _intent(controller.toggle_mode())

    @app.post("/toggle_facing", response_model=IntentResponse)
    def toggle_facing():
        return _intent(controller.toggle_facing())

    @app.post("/dismiss", response_model=IntentResponse)
    def dismiss():
        return _intent(controller.dismiss())

    @app.get("/permission", response_model=PermissionResponse)
    def get_permission():
        return PermissionResponse(granted=permission.has_permission())

    @app.post("/permission/request", response_model=PermissionResponse)
    def request_permission():
        status.log("PERMISSION request")
        return PermissionResponse(granted=permission.request_permission())

    @app.get("/health")
    def health():
        checks = {
            "api": True,
            "camera_adapter": type(controller.camera).__name__,
            "classifier_adapter": type(controller.classifier).__name__,
            "permission_granted": permission.has_permission(),
        }
        endpoint = getattr(controller.classifier, "endpoint", None)
        if endpoint:
            checks["classifier_endpoint"] = endpoint
        checks["all_ok"] = checks["api"] and checks["permission_granted"]
        return checks

    return app
