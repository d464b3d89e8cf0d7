import time
from organlens.orchestrator import errors
from organlens.orchestrator.contracts import (
    CaptureOutcome, ClassificationError, Loading, Phase, ShowError, ShowResult,
)
from organlens.orchestrator.session import SessionState

DEFAULT_QUALITY = 0.5


class CaptureController:
    def __init__(self, camera, classifier, session: SessionState, status_store,
                 permission=None, quality: float = DEFAULT_QUALITY):
        self.camera = camera
        self.classifier = classifier
        self.session = session
        self.status = status_store
        self.permission = permission
        self.quality = quality
        self.phase: Phase = "idle"
        self._recording_handle = None

    def _enter(self, phase: Phase):
        self.phase = phase
        self.status.log(f"capture: phase={phase}")

    def _reject(self, code: str, **kw) -> CaptureOutcome:
        self.status.last_error_code = code
        self.status.log(f"capture: rejected {code}")
        return CaptureOutcome(ok=False, error_code=code, **kw)

    def shutter(self) -> CaptureOutcome:
        """Shutter press: still capture in still mode, record start/stop in video mode."""
        if self.session.mode == "video":
            return self.toggle_recording()
        return self.take_picture()

    def take_picture(self) -> CaptureOutcome:
        if self.session.mode != "still":
            return self._reject(errors.ERR_WRONG_MODE)
        if self.permission is not None and not self.permission.has_permission():
            return self._reject(errors.ERR_PERMISSION_DENIED)
        if not self.session.begin_capture():
            return self._reject(errors.ERR_BUSY)

        t0 = time.time()
        try:
            # 1) capture still from the device
            self._enter("capturing")
            try:
                image = self.camera.capture_still(quality=self.quality)
            except Exception as e:
                self.status.log(f"capture: camera error {type(e).__name__}: {e}")
                image = None
            if image is None or not image.base64:
                # silent abort: display stays as it was
                self.status.log("capture: no image data, aborting")
                self.status.last_error_code = errors.ERR_CAPTURE_FAILED
                return CaptureOutcome(ok=False, error_code=errors.ERR_CAPTURE_FAILED,
                                      duration_ms=int((time.time() - t0) * 1000))
            self.status.log(f"capture: image ready ({len(image.base64)} b64 chars)")

            # 2) loading: one classification round trip
            self._enter("loading")
            self.session.update_display(Loading())
            try:
                outcome = self.classifier.classify(image.base64)
            except Exception as e:
                self.status.log(f"capture: classifier error {type(e).__name__}: {e}")
                outcome = None

            # 3) settle display
            self._enter("settled")
            dt = int((time.time() - t0) * 1000)
            self.status.last_duration_ms = dt
            if outcome is not None and outcome.ok:
                self.session.update_display(ShowResult(outcome.result))
                self.status.last_error_code = None
                self.status.log(f"capture: done label={outcome.result.label!r} dt={dt}ms")
                return CaptureOutcome(ok=True, duration_ms=dt, result=outcome.result)

            error = outcome.error if outcome is not None else ClassificationError(kind=errors.ERR_TRANSPORT)
            self.session.update_display(ShowError(errors.message_for(error)))
            self.status.last_error_code = error.kind
            self.status.log(f"capture: error {error.kind} status={error.status_code} dt={dt}ms")
            return CaptureOutcome(ok=False, duration_ms=dt, error_code=error.kind)
        finally:
            self._enter("idle")
            self.session.end_capture()

    def toggle_recording(self) -> CaptureOutcome:
        """Start/stop video. Recording is never classified and never touches display."""
        if self.session.mode != "video":
            return self._reject(errors.ERR_WRONG_MODE)
        if self.permission is not None and not self.permission.has_permission():
            return self._reject(errors.ERR_PERMISSION_DENIED)

        with self.session.exclusive() as claimed:
            if not claimed:
                return self._reject(errors.ERR_BUSY)
            try:
                if self.session.recording:
                    self.camera.stop_recording(self._recording_handle)
                    self._recording_handle = None
                    self.session.set_recording(False)
                    self.status.log("record: stopped")
                else:
                    self._recording_handle = self.camera.start_recording()
                    self.session.set_recording(True)
                    self.status.log("record: started")
            except Exception as e:
                self.status.log(f"record: error {type(e).__name__}: {e}")
                return self._reject(errors.ERR_RECORDING_FAILED, recording=self.session.recording)
            return CaptureOutcome(ok=True, recording=self.session.recording)

    def _refused(self) -> CaptureOutcome:
        if self.session.recording:
            return self._reject(errors.ERR_RECORDING_ACTIVE)
        return self._reject(errors.ERR_BUSY)

    def toggle_mode(self) -> CaptureOutcome:
        mode = self.session.toggle_mode()
        if mode is None:
            return self._refused()
        self.status.log(f"mode: {mode}")
        return CaptureOutcome(ok=True)

    def toggle_facing(self) -> CaptureOutcome:
        facing = self.session.toggle_facing(apply=self.camera.set_facing)
        if facing is None:
            return self._refused()
        self.status.log(f"facing: {facing}")
        return CaptureOutcome(ok=True)

    def dismiss(self) -> CaptureOutcome:
        # Loading must settle before it can be cleared
        if not self.session.dismiss_result():
            return self._reject(errors.ERR_BUSY)
        self.status.log("display: dismissed")
        return CaptureOutcome(ok=True)

    def shutdown(self):
        if self.session.recording and self._recording_handle is not None:
            self.camera.stop_recording(self._recording_handle)
            self.session.set_recording(False)
        self.camera.release()
        self.classifier.close()
