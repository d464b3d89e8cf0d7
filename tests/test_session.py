from __future__ import annotations

import pytest

from organlens.orchestrator.contracts import (
    ClassificationResult, Empty, Loading, ShowError, ShowResult,
)
from organlens.orchestrator.session import SessionState


def test_defaults() -> None:
    s = SessionState()
    assert s.mode == "still"
    assert s.facing == "back"
    assert s.recording is False
    assert s.display == Empty()
    assert s.busy is False


def test_toggles_flip_back_and_forth() -> None:
    s = SessionState()
    assert s.toggle_mode() == "video"
    assert s.toggle_mode() == "still"
    assert s.toggle_facing() == "front"
    assert s.toggle_facing() == "back"


@pytest.mark.parametrize(
    "prior",
    [
        Empty(),
        Loading(),
        ShowResult(ClassificationResult(label="heart", description="d")),
        ShowError("Server error: 500. Please try again."),
    ],
)
def test_dismiss_always_yields_empty(prior) -> None:
    s = SessionState()
    s.update_display(prior)
    s.dismiss_result()
    assert s.display == Empty()
    s.dismiss_result()
    assert s.display == Empty()


def test_listeners_see_every_update_once() -> None:
    s = SessionState()
    seen = []
    unsubscribe = s.subscribe(seen.append)
    s.update_display(Loading())
    s.update_display(ShowError("x"))
    unsubscribe()
    s.dismiss_result()
    assert [d.kind for d in seen] == ["loading", "error"]


def test_capture_guard_rejects_second_claim() -> None:
    s = SessionState()
    assert s.begin_capture() is True
    assert s.busy is True
    assert s.begin_capture() is False
    s.end_capture()
    assert s.busy is False
    assert s.begin_capture() is True
    s.end_capture()


def test_end_capture_without_claim_is_noop() -> None:
    s = SessionState()
    s.end_capture()
    assert s.busy is False


def test_intents_refused_while_capture_slot_is_held() -> None:
    s = SessionState()
    s.update_display(Loading())
    seen = []
    s.subscribe(seen.append)
    assert s.begin_capture()

    assert s.dismiss_result() is False
    assert s.toggle_mode() is None
    assert s.toggle_facing() is None

    assert s.display == Loading()
    assert (s.mode, s.facing) == ("still", "back")
    assert seen == []
    s.end_capture()
    assert s.dismiss_result() is True


def test_toggles_refused_while_recording() -> None:
    s = SessionState()
    s.toggle_mode()
    s.set_recording(True)
    assert s.toggle_mode() is None
    assert s.toggle_facing() is None
    assert s.mode == "video"
    assert s.busy is False


def test_toggle_facing_applies_before_commit() -> None:
    s = SessionState()
    applied = []

    def apply(facing) -> None:
        applied.append((facing, s.facing, s.busy))

    assert s.toggle_facing(apply=apply) == "front"
    assert applied == [("front", "back", True)]
    assert s.busy is False


def test_failed_apply_keeps_facing_and_releases_slot() -> None:
    s = SessionState()

    def apply(facing) -> None:
        raise RuntimeError("device gone")

    with pytest.raises(RuntimeError):
        s.toggle_facing(apply=apply)
    assert s.facing == "back"
    assert s.busy is False
