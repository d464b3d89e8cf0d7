import threading
from dataclasses import dataclass, field
from typing import Optional, List

MAX_LOG_LINES = 200

@dataclass
class StatusStore:
    last_error_code: Optional[str] = None   # code of the most recent rejected/failed intent
    last_duration_ms: Optional[int] = None  # most recent capture attempt round trip
    logs: List[str] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def log(self, msg: str):
        # routes run on thread-pool threads
        with self._lock:
            self.logs.append(msg)
            if len(self.logs) > MAX_LOG_LINES:
                self.logs = self.logs[-MAX_LOG_LINES:]
