"""
Service entrypoint: wires adapters from the environment and serves the API.

    python -m organlens.services.main          # or: uvicorn organlens.services.main:app
"""
import os
import uvicorn
from dotenv import load_dotenv
from organlens.adapters.permission.base import GrantedPermission
from organlens.orchestrator.session import SessionState
from organlens.orchestrator.state_machine import CaptureController
from organlens.services.api import create_app
from organlens.services.config import Settings
from organlens.services.status_store import StatusStore

load_dotenv(dotenv_path=".env", override=False)


def build_camera(settings: Settings, status: StatusStore):
    if settings.camera_adapter == "cv2":
        from organlens.adapters.camera.cv2_camera import CV2Camera
        from organlens.adapters.permission.device_permission import DevicePermission
        camera = CV2Camera(
            status,
            back_index=settings.camera_index_back,
            front_index=settings.camera_index_front,
            recordings_dir=settings.recordings_dir,
        )
        status.log("camera: CV2Camera ready")
        return camera, DevicePermission(status, camera)
    from organlens.adapters.camera.mock_camera import MockCamera
    status.log(f"camera: MockCamera refs={settings.mock_camera_dir}")
    return MockCamera(status, refs_dir=settings.mock_camera_dir), GrantedPermission()


def build_classifier(settings: Settings, status: StatusStore):
    if settings.classifier_adapter == "mock":
        from organlens.adapters.classifier.mock_classifier import MockClassifier
        status.log("classifier: MockClassifier")
        return MockClassifier(status)
    from organlens.adapters.classifier.http_classifier import HttpClassifier
    kwargs = {}
    if settings.classifier_timeout_s is not None:
        kwargs["timeout"] = settings.classifier_timeout_s
    status.log(f"classifier: http -> {settings.classifier_url}")
    return HttpClassifier(status, endpoint=settings.classifier_url,
                          instruction=settings.instruction, **kwargs)


def build_app(settings: Settings | None = None):
    settings = settings or Settings.from_env()
    status = StatusStore()
    camera, permission = build_camera(settings, status)
    classifier = build_classifier(settings, status)
    controller = CaptureController(
        camera=camera,
        classifier=classifier,
        session=SessionState(),
        status_store=status,
        permission=permission,
        quality=settings.capture_quality,
    )
    return create_app(controller, status, permission)


app = build_app()


if __name__ == "__main__":
    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", "8000")))
