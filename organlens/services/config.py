"""
Service configuration from the environment (after load_dotenv).

  CLASSIFIER_ADAPTER     http | mock              (default: http)
  CLASSIFIER_URL         classification endpoint
  CLASSIFIER_TIMEOUT_S   request timeout seconds  (default: httpx default)
  CLASSIFIER_PROMPT_FILE text file replacing the built-in instruction
  CAMERA_ADAPTER         cv2 | mock               (default: cv2)
  CAMERA_INDEX_BACK      device index for back facing  (default: 0)
  CAMERA_INDEX_FRONT     device index for front facing (default: 1)
  CAPTURE_QUALITY        JPEG quality 0..1        (default: 0.5)
  RECORDINGS_DIR         where videos are written (default: recordings)
  MOCK_CAMERA_DIR        JPEG folder served by the mock camera
"""
import os
from dataclasses import dataclass
from typing import Optional
from organlens.adapters.classifier.http_classifier import DEFAULT_ENDPOINT
from organlens.orchestrator.prompts import load_prompt

@dataclass
class Settings:
    classifier_adapter: str = "http"
    classifier_url: str = DEFAULT_ENDPOINT
    classifier_timeout_s: Optional[float] = None
    instruction: str = load_prompt(None)
    camera_adapter: str = "cv2"
    camera_index_back: int = 0
    camera_index_front: int = 1
    capture_quality: float = 0.5
    recordings_dir: str = "recordings"
    mock_camera_dir: Optional[str] = None

    @classmethod
    def from_env(cls, env=None) -> "Settings":
        env = os.environ if env is None else env
        timeout = env.get("CLASSIFIER_TIMEOUT_S")
        quality = float(env.get("CAPTURE_QUALITY", "0.5"))
        if not 0.0 <= quality <= 1.0:
            raise ValueError(f"CAPTURE_QUALITY must be within 0..1, got {quality}")
        return cls(
            classifier_adapter=env.get("CLASSIFIER_ADAPTER", "http").lower(),
            classifier_url=env.get("CLASSIFIER_URL", DEFAULT_ENDPOINT),
            classifier_timeout_s=float(timeout) if timeout else None,
            instruction=load_prompt(env.get("CLASSIFIER_PROMPT_FILE")),
            camera_adapter=env.get("CAMERA_ADAPTER", "cv2").lower(),
            camera_index_back=int(env.get("CAMERA_INDEX_BACK", "0")),
            camera_index_front=int(env.get("CAMERA_INDEX_FRONT", "1")),
            capture_quality=quality,
            recordings_dir=env.get("RECORDINGS_DIR", "recordings"),
            mock_camera_dir=env.get("MOCK_CAMERA_DIR") or None,
        )
