"""Mock camera: serves JPEGs from a directory (or fixed bytes) as base64 stills."""
import base64
import random
from pathlib import Path
from organlens.adapters.camera.base import CameraAdapter
from organlens.orchestrator.contracts import CapturedImage, Facing


class MockCamera(CameraAdapter):
    def __init__(self, status_store, refs_dir: str | Path | None = None, image_bytes: bytes | None = None):
        self.status = status_store
        self.refs_dir = Path(refs_dir) if refs_dir else None
        self.image_bytes = image_bytes
        self.facing: Facing = "back"
        self.recordings = 0
        self.captures = 0

    def _pick(self) -> bytes | None:
        if self.image_bytes is not None:
            return self.image_bytes
        if self.refs_dir is None:
            return None
        jpegs = list(self.refs_dir.glob("*.jpg"))
        if not jpegs:
            self.status.log("mock_camera: no ref images found")
            return None
        chosen = random.choice(jpegs)
        self.status.log(f"mock_camera: serving {chosen.name}")
        return chosen.read_bytes()

    def capture_still(self, quality: float = 0.5) -> CapturedImage | None:
        self.captures += 1
        data = self._pick()
        if not data:
            return None
        return CapturedImage(base64=base64.b64encode(data).decode("ascii"))

    def set_facing(self, facing: Facing):
        self.facing = facing

    def start_recording(self):
        self.recordings += 1
        self.status.log(f"mock_camera: recording #{self.recordings} started")
        return self.recordings

    def stop_recording(self, handle):
        self.status.log(f"mock_camera: recording #{handle} stopped")
