"""Listener aliases and capability protocols."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional, Protocol, runtime_checkable

Listener = Callable[..., Any]
AnyListener = Callable[..., Any]


@runtime_checkable
class EventSubmitter(Protocol):
    """Side of an emitter that may only publish events."""

    def emit(self, event_name: str, *args: Any) -> None: ...


@runtime_checkable
class EventReceiver(Protocol):
    """Side of an emitter that may subscribe and wait, but never publish."""

    def on(self, event_name: str, listener: Listener) -> None: ...

    def on_first(self, event_name: str, listener: Listener) -> None: ...

    def on_any(self, listener: AnyListener) -> None: ...

    def off(self, event_name: Optional[str] = None, listener: Optional[Listener] = None) -> None: ...

    def off_any(self, listener: AnyListener) -> None: ...

    def wait_for(self, event_name: str) -> "asyncio.Future[Any]": ...

    def wait_for_first(self, event_name: str) -> "asyncio.Future[Any]": ...
