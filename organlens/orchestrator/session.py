import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, List, Optional
from organlens.orchestrator.contracts import Display, Empty, Facing, Mode

Listener = Callable[[Display], None]

@dataclass
class SessionState:
    mode: Mode = "still"
    facing: Facing = "back"
    recording: bool = False
    display: Display = field(default_factory=Empty)
    _listeners: List[Listener] = field(default_factory=list, repr=False)
    _display_lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _capture_lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    # ---- in-flight guard ----

    @property
    def busy(self) -> bool:
        return self._capture_lock.locked()

    def begin_capture(self) -> bool:
        """Claim the capture slot. False when another capture is in flight."""
        return self._capture_lock.acquire(blocking=False)

    def end_capture(self):
        if self._capture_lock.locked():
            self._capture_lock.release()

    @contextmanager
    def exclusive(self):
        """Hold the capture slot for a short intent. Yields False when a capture is in flight."""
        claimed = self._capture_lock.acquire(blocking=False)
        try:
            yield claimed
        finally:
            if claimed:
                self._capture_lock.release()

    # ---- display ----

    def update_display(self, value: Display):
        """The only writer of `display`; listeners see each value exactly once."""
        with self._display_lock:
            self.display = value
            listeners = list(self._listeners)
        for cb in listeners:
            cb(value)

    def subscribe(self, cb: Listener) -> Callable[[], None]:
        self._listeners.append(cb)
        return lambda: self._listeners.remove(cb)

    # ---- user intents ----
    # Each intent claims the capture slot, so none can land between Loading and its settle.
    # None / False means refused: a capture is in flight, or a recording is running.

    def toggle_mode(self) -> Optional[Mode]:
        with self.exclusive() as claimed:
            if not claimed or self.recording:
                return None
            self.mode = "video" if self.mode == "still" else "still"
            return self.mode

    def toggle_facing(self, apply: Optional[Callable[[Facing], None]] = None) -> Optional[Facing]:
        """`apply` runs under the slot, before the new facing is committed."""
        with self.exclusive() as claimed:
            if not claimed or self.recording:
                return None
            facing: Facing = "front" if self.facing == "back" else "back"
            if apply is not None:
                apply(facing)
            self.facing = facing
            return facing

    def set_recording(self, v: bool):
        self.recording = v

    def dismiss_result(self) -> bool:
        with self.exclusive() as claimed:
            if claimed:
                self.update_display(Empty())
            return claimed
