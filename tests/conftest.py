from __future__ import annotations

import pytest

from organlens.adapters.camera.mock_camera import MockCamera
from organlens.orchestrator.contracts import (
    ClassificationError, ClassificationResult, ClassifyOutcome,
)
from organlens.orchestrator.session import SessionState
from organlens.services.status_store import StatusStore

HEART = (
    "Organ Model: heart\n"
    "Function in Frogs: Pumps blood around the body.\n"
    "Fun Fact: Frogs have a three-chambered heart."
)


class FakeClassifier:
    """Returns queued outcomes and records every image it was asked about."""

    def __init__(self, *outcomes: ClassifyOutcome | Exception) -> None:
        self.outcomes = list(outcomes)
        self.calls: list[str] = []
        self.closed = False
        self.on_call = None

    def classify(self, encoded_image: str) -> ClassifyOutcome:
        self.calls.append(encoded_image)
        if self.on_call is not None:
            self.on_call()
        item = self.outcomes.pop(0) if self.outcomes else ok(HEART)
        if isinstance(item, Exception):
            raise item
        return item

    def close(self) -> None:
        self.closed = True


def ok(description: str, label: str = "heart") -> ClassifyOutcome:
    return ClassifyOutcome(result=ClassificationResult(label=label, description=description))


def err(kind: str, status_code: int | None = None) -> ClassifyOutcome:
    return ClassifyOutcome(error=ClassificationError(kind=kind, status_code=status_code))


@pytest.fixture
def status() -> StatusStore:
    return StatusStore()


@pytest.fixture
def session() -> SessionState:
    return SessionState()


@pytest.fixture
def camera(status: StatusStore) -> MockCamera:
    return MockCamera(status, image_bytes=b"\xff\xd8fake-jpeg\xff\xd9")
