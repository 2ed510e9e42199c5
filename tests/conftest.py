from __future__ import annotations

from typing import Any, List, Tuple

import pytest

from squee.config import EmitterConfig
from squee.emitter import EventEmitter


class RecordingListener:
    """Callable that records every call's positional args."""

    def __init__(self) -> None:
        self.calls: List[Tuple[Any, ...]] = []

    def __call__(self, *args: Any) -> None:
        self.calls.append(args)

    @property
    def called(self) -> bool:
        return bool(self.calls)


@pytest.fixture
def emitter() -> EventEmitter:
    return EventEmitter()


@pytest.fixture
def lenient_emitter() -> EventEmitter:
    return EventEmitter(EmitterConfig(strict_off=False))


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def make_listener():
    return RecordingListener
