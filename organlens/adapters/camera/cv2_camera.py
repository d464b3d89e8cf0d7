"""
OpenCV camera adapter.
Back/front facing map to two device indices (CAMERA_INDEX_BACK / CAMERA_INDEX_FRONT).
Stills are JPEG encoded at round(quality * 100) and returned base64 encoded.
Recording writes frames from a background thread to RECORDINGS_DIR until stopped.
"""
import base64
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
import cv2
from organlens.adapters.camera.base import CameraAdapter
from organlens.orchestrator.contracts import CapturedImage, Facing

RECORD_FPS = 20.0


@dataclass
class RecordingHandle:
    path: Path
    started_at: float
    stop_event: threading.Event = field(default_factory=threading.Event)
    thread: threading.Thread | None = None
    frames: int = 0


def jpeg_quality(quality: float) -> int:
    return max(0, min(100, round(quality * 100)))


class CV2Camera(CameraAdapter):
    def __init__(self, status_store, back_index: int = 0, front_index: int = 1,
                 recordings_dir: str | Path = "recordings"):
        self.status = status_store
        self._indices = {"back": back_index, "front": front_index}
        self._facing: Facing = "back"
        self._recordings_dir = Path(recordings_dir)
        self._cap = None
        self._lock = threading.Lock()

    @property
    def index(self) -> int:
        return self._indices[self._facing]

    def _open(self):
        if self._cap is None or not self._cap.isOpened():
            self._cap = cv2.VideoCapture(self.index)
            if not self._cap.isOpened():
                self.status.log(f"cv2_camera: failed to open device {self.index}")

    def _read(self):
        with self._lock:
            self._open()
            if self._cap is None or not self._cap.isOpened():
                return None
            ret, frame = self._cap.read()
        if not ret or frame is None:
            return None
        return frame

    def is_available(self) -> bool:
        with self._lock:
            self._open()
            return self._cap is not None and self._cap.isOpened()

    def capture_still(self, quality: float = 0.5) -> CapturedImage | None:
        frame = self._read()
        if frame is None:
            self.status.log("cv2_camera: frame capture failed")
            return None
        ok, buf = cv2.imencode(".jpg", frame, [cv2.IMWRITE_JPEG_QUALITY, jpeg_quality(quality)])
        if not ok:
            self.status.log("cv2_camera: jpeg encode failed")
            return None
        h, w = frame.shape[:2]
        return CapturedImage(base64=base64.b64encode(bytes(buf)).decode("ascii"), width=w, height=h)

    def set_facing(self, facing: Facing):
        if facing == self._facing:
            return
        self.release()
        self._facing = facing
        self.status.log(f"cv2_camera: facing={facing} device={self.index}")

    def start_recording(self) -> RecordingHandle:
        first = self._read()
        if first is None:
            raise RuntimeError(f"camera device {self.index} returned no frame")
        self._recordings_dir.mkdir(parents=True, exist_ok=True)
        path = self._recordings_dir / f"video_{time.strftime('%Y%m%d_%H%M%S')}.mp4"
        h, w = first.shape[:2]
        writer = cv2.VideoWriter(str(path), cv2.VideoWriter_fourcc(*"mp4v"), RECORD_FPS, (w, h))
        if not writer.isOpened():
            raise RuntimeError(f"cannot open video writer for {path}")

        handle = RecordingHandle(path=path, started_at=time.time())

        def _loop():
            frame = first
            try:
                while frame is not None and not handle.stop_event.is_set():
                    writer.write(frame)
                    handle.frames += 1
                    frame = self._read()
            finally:
                writer.release()

        handle.thread = threading.Thread(target=_loop, name="cv2-recorder", daemon=True)
        handle.thread.start()
        self.status.log(f"cv2_camera: recording → {path}")
        return handle

    def stop_recording(self, handle: RecordingHandle):
        handle.stop_event.set()
        if handle.thread is not None:
            handle.thread.join(timeout=5.0)
        dt = time.time() - handle.started_at
        self.status.log(f"cv2_camera: recording stopped {handle.path.name} frames={handle.frames} dt={dt:.1f}s")

    def release(self):
        with self._lock:
            if self._cap and self._cap.isOpened():
                self._cap.release()
            self._cap = None
