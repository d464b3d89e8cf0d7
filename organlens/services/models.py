from pydantic import BaseModel
from typing import Literal, Optional

class ResultOut(BaseModel):
    label: str
    description: str

class DisplayOut(BaseModel):
    kind: Literal["empty", "loading", "result", "error"]
    text: Optional[str] = None           # loading text or error message
    result: Optional[ResultOut] = None

class StatusResponse(BaseModel):
    mode: Literal["still", "video"]
    facing: Literal["front", "back"]
    recording: bool
    busy: bool
    phase: Literal["idle", "capturing", "loading", "settled"]
    permission_granted: bool
    display: DisplayOut
    last_error_code: Optional[str] = None
    last_duration_ms: Optional[int] = None
    logs: list[str]

class IntentResponse(BaseModel):
    ok: bool
    error_code: Optional[str] = None
    duration_ms: int = 0
    result: Optional[ResultOut] = None
    recording: Optional[bool] = None
    display: DisplayOut

class PermissionResponse(BaseModel):
    granted: bool
