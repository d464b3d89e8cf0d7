from abc import ABC, abstractmethod
from organlens.orchestrator.contracts import CapturedImage, Facing

class CameraAdapter(ABC):
    @abstractmethod
    def capture_still(self, quality: float = 0.5) -> CapturedImage | None:
        """Capture one still. quality is 0..1 (JPEG). Returns None on failure."""
        ...

    @abstractmethod
    def start_recording(self):
        """Start recording video; returns an opaque handle for stop_recording()."""
        ...

    @abstractmethod
    def stop_recording(self, handle):
        ...

    def set_facing(self, facing: Facing):
        pass

    def release(self):
        pass
