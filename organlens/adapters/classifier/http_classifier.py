"""
HTTP classification client.

One POST per capture to the configured endpoint:
  Request:  {"image_base64": "<jpeg b64>", "system_prompt": "<instruction>"}
  Response: {"label"?: "...", "description": "..."}
API Gateway answers oversize bodies with {"message": "Request Entity Too Large"}.

No auth, no retry, no caching. Every failure is returned as a ClassificationError.
"""
import httpx
from organlens.adapters.classifier.base import ClassifierAdapter
from organlens.orchestrator import errors
from organlens.orchestrator.contracts import (
    CaptureRequest, ClassificationError, ClassificationResult, ClassifyOutcome,
)
from organlens.orchestrator.prompts import DEFAULT_PROMPT

DEFAULT_ENDPOINT = "https://ucxzs3tf2l.execute-api.us-west-1.amazonaws.com/dev/process-image"

_UNSET = object()


class HttpClassifier(ClassifierAdapter):
    def __init__(self, status_store, endpoint: str = DEFAULT_ENDPOINT,
                 instruction: str = DEFAULT_PROMPT, timeout=_UNSET,
                 transport: httpx.BaseTransport | None = None):
        self.status = status_store
        self.endpoint = endpoint
        self.instruction = instruction
        # timeout unset -> httpx default
        kwargs = {} if timeout is _UNSET else {"timeout": timeout}
        self._client = httpx.Client(transport=transport, **kwargs)

    def classify(self, encoded_image: str | bytes) -> ClassifyOutcome:
        if isinstance(encoded_image, bytes):
            try:
                encoded_image = encoded_image.decode("ascii")
            except UnicodeDecodeError:
                raise ValueError("encoded_image must be base64 text") from None
        if not encoded_image:
            raise ValueError("encoded_image must be non-empty")

        req = CaptureRequest(image_base64=encoded_image, instruction=self.instruction)
        self.status.log(f"http_classifier: POST {self.endpoint} ({len(encoded_image)} b64 chars)")
        try:
            resp = self._client.post(self.endpoint, json=req.to_payload())
        except httpx.HTTPError as e:
            self.status.log(f"http_classifier: transport error {type(e).__name__}: {e}")
            return self._fail(errors.ERR_TRANSPORT, detail=str(e) or type(e).__name__)
        return self._interpret(resp)

    def _interpret(self, resp: httpx.Response) -> ClassifyOutcome:
        try:
            data = resp.json()
        except ValueError:
            data = None

        if isinstance(data, dict) and data.get("message") == errors.OVERSIZE_MARKER:
            self.status.log(f"http_classifier: HTTP {resp.status_code} payload too large")
            return self._fail(errors.ERR_PAYLOAD_TOO_LARGE, status_code=resp.status_code)

        if not resp.is_success:
            self.status.log(f"http_classifier: HTTP {resp.status_code} — {resp.text[:300]}")
            return self._fail(errors.ERR_SERVER, status_code=resp.status_code)

        if data is None:
            self.status.log("http_classifier: response body is not JSON")
            return self._fail(errors.ERR_TRANSPORT, status_code=resp.status_code, detail="invalid JSON")

        description = data.get("description") if isinstance(data, dict) else None
        if not isinstance(description, str) or not description:
            self.status.log(f"http_classifier: invalid response data: {str(data)[:300]}")
            return self._fail(errors.ERR_MALFORMED, status_code=resp.status_code)

        label = data.get("label")
        result = ClassificationResult(label=label if isinstance(label, str) else "", description=description)
        self.status.log(f"http_classifier: → label={result.label!r} ({len(description)} chars)")
        return ClassifyOutcome(result=result)

    def _fail(self, kind: str, status_code: int | None = None, detail: str | None = None) -> ClassifyOutcome:
        return ClassifyOutcome(error=ClassificationError(kind=kind, status_code=status_code, detail=detail))

    def close(self):
        self._client.close()
