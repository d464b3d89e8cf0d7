from dataclasses import dataclass
from typing import Literal, Optional, Union

Mode = Literal["still", "video"]
Facing = Literal["front", "back"]
Phase = Literal["idle", "capturing", "loading", "settled"]
ErrorKind = Literal["TRANSPORT", "SERVER_ERROR", "PAYLOAD_TOO_LARGE", "MALFORMED_RESPONSE"]

@dataclass(frozen=True)
class CaptureRequest:
    image_base64: str          # JPEG, base64 encoded by the camera adapter
    instruction: str           # sent as system_prompt

    def to_payload(self) -> dict:
        return {"image_base64": self.image_base64, "system_prompt": self.instruction}

@dataclass(frozen=True)
class ClassificationResult:
    label: str
    description: str           # never empty

@dataclass(frozen=True)
class ClassificationError:
    kind: ErrorKind
    status_code: Optional[int] = None
    detail: Optional[str] = None

@dataclass(frozen=True)
class ClassifyOutcome:
    result: Optional[ClassificationResult] = None
    error: Optional[ClassificationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

@dataclass(frozen=True)
class CapturedImage:
    base64: str
    width: int = 0
    height: int = 0

# Display: exactly one of these is shown at a time
@dataclass(frozen=True)
class Empty:
    kind: Literal["empty"] = "empty"

@dataclass(frozen=True)
class Loading:
    kind: Literal["loading"] = "loading"
    text: str = "Analyzing your image..."

@dataclass(frozen=True)
class ShowResult:
    result: ClassificationResult
    kind: Literal["result"] = "result"

@dataclass(frozen=True)
class ShowError:
    message: str
    kind: Literal["error"] = "error"

Display = Union[Empty, Loading, ShowResult, ShowError]

@dataclass
class CaptureOutcome:
    ok: bool
    duration_ms: int = 0
    error_code: Optional[str] = None
    result: Optional[ClassificationResult] = None
    recording: Optional[bool] = None
