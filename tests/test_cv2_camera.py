from __future__ import annotations

import base64
import time
from pathlib import Path

import cv2
import numpy as np
import pytest

from organlens.adapters.camera import cv2_camera
from organlens.adapters.camera.cv2_camera import CV2Camera
from organlens.services.status_store import StatusStore

FRAME = np.random.RandomState(7).randint(0, 256, size=(48, 64, 3), dtype=np.uint8)


class _Devices:
    """Stands in for cv2.VideoCapture; remembers every device it opened."""

    def __init__(self, available=(0, 1)) -> None:
        self.available = set(available)
        self.opened: list[_Capture] = []

    def __call__(self, index: int) -> "_Capture":
        cap = _Capture(index, index in self.available)
        self.opened.append(cap)
        return cap


class _Capture:
    def __init__(self, index: int, ok: bool) -> None:
        self.index = index
        self.ok = ok
        self.released = False
        self.reads = 0

    def isOpened(self) -> bool:
        return self.ok and not self.released

    def read(self):
        self.reads += 1
        time.sleep(0.001)
        return True, FRAME.copy()

    def release(self) -> None:
        self.released = True


class _Writer:
    instances: list["_Writer"] = []

    def __init__(self, path: str, fourcc, fps: float, size) -> None:
        self.path = Path(path)
        self.fps = fps
        self.size = size
        self.frames = 0
        self.released = False
        _Writer.instances.append(self)

    def isOpened(self) -> bool:
        return True

    def write(self, frame) -> None:
        assert frame.shape == FRAME.shape
        self.frames += 1

    def release(self) -> None:
        self.released = True


@pytest.fixture
def devices(monkeypatch: pytest.MonkeyPatch) -> _Devices:
    fake = _Devices()
    monkeypatch.setattr(cv2_camera.cv2, "VideoCapture", fake)
    return fake


@pytest.fixture
def writers(monkeypatch: pytest.MonkeyPatch) -> list[_Writer]:
    _Writer.instances = []
    monkeypatch.setattr(cv2_camera.cv2, "VideoWriter", _Writer)
    return _Writer.instances


def test_still_is_base64_jpeg(devices: _Devices) -> None:
    cam = CV2Camera(StatusStore())

    image = cam.capture_still(quality=0.5)

    raw = base64.b64decode(image.base64)
    assert raw[:2] == b"\xff\xd8"
    assert raw[-2:] == b"\xff\xd9"
    decoded = cv2.imdecode(np.frombuffer(raw, dtype=np.uint8), cv2.IMREAD_COLOR)
    assert decoded.shape == FRAME.shape
    assert (image.width, image.height) == (64, 48)
    assert [c.index for c in devices.opened] == [0]


def test_quality_changes_jpeg_size(devices: _Devices) -> None:
    cam = CV2Camera(StatusStore())
    low = cam.capture_still(quality=0.1)
    high = cam.capture_still(quality=0.95)
    assert len(high.base64) > len(low.base64)
    # device stays open between stills
    assert len(devices.opened) == 1


def test_set_facing_reopens_front_device(devices: _Devices) -> None:
    status = StatusStore()
    cam = CV2Camera(status, back_index=0, front_index=1)
    cam.capture_still()

    cam.set_facing("front")
    assert devices.opened[0].released
    assert cam.index == 1
    cam.capture_still()

    assert [c.index for c in devices.opened] == [0, 1]
    assert "cv2_camera: facing=front device=1" in status.logs


def test_set_same_facing_keeps_device(devices: _Devices) -> None:
    cam = CV2Camera(StatusStore())
    cam.capture_still()
    cam.set_facing("back")
    assert not devices.opened[0].released


def test_unavailable_device_returns_none(devices: _Devices) -> None:
    devices.available = set()
    status = StatusStore()
    cam = CV2Camera(status, back_index=3)

    assert cam.capture_still() is None
    assert cam.is_available() is False
    assert "cv2_camera: failed to open device 3" in status.logs


def test_recording_writes_frames_until_stopped(devices: _Devices, writers: list[_Writer], tmp_path: Path) -> None:
    cam = CV2Camera(StatusStore(), recordings_dir=tmp_path / "videos")

    handle = cam.start_recording()
    deadline = time.time() + 5
    while handle.frames < 3 and time.time() < deadline:
        time.sleep(0.005)
    cam.stop_recording(handle)

    assert not handle.thread.is_alive()
    assert len(writers) == 1
    writer = writers[0]
    assert writer.released
    assert writer.path == handle.path
    assert handle.path.parent == tmp_path / "videos"
    assert handle.path.parent.is_dir()
    assert handle.path.suffix == ".mp4"
    assert writer.size == (64, 48)
    assert writer.fps == cv2_camera.RECORD_FPS
    assert writer.frames == handle.frames >= 3


def test_recording_without_frames_raises(devices: _Devices, writers: list[_Writer], tmp_path: Path) -> None:
    devices.available = set()
    cam = CV2Camera(StatusStore(), recordings_dir=tmp_path)
    with pytest.raises(RuntimeError):
        cam.start_recording()
    assert writers == []
