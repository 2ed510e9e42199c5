"""In-process event emitter with first-emission capture and awaitable waits."""

from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from squee.config import EmitterConfig
from squee.errors import InvalidArgumentError
from squee.types import AnyListener, Listener
from squee.utils import remove_from_list

logger = logging.getLogger(__name__)


@dataclass
class Registration:
    """Listeners and first-emission args registered to one event name."""

    listeners: List[Listener] = field(default_factory=list)
    first_only_listeners: List[Listener] = field(default_factory=list)
    first_args: Optional[Tuple[Any, ...]] = None

    @property
    def fired(self) -> bool:
        return self.first_args is not None

    def reset(self) -> None:
        self.listeners.clear()
        self.first_only_listeners.clear()
        self.first_args = None

    def remove(self, listener: Listener) -> bool:
        """Strip every occurrence of ``listener``. Returns True if any was found."""
        in_listeners = remove_from_list(self.listeners, listener)
        in_first_only = remove_from_list(self.first_only_listeners, listener)
        return in_listeners or in_first_only


def _resolve_future(loop: asyncio.AbstractEventLoop, future: "asyncio.Future[Any]", value: Any) -> None:
    def _set() -> None:
        if not future.done():
            future.set_result(value)

    try:
        running = asyncio.get_running_loop()
    except RuntimeError:
        running = None

    if running is loop:
        _set()
    else:
        loop.call_soon_threadsafe(_set)


class EventEmitter:
    """Hub for triggerable application events.

    Listeners run synchronously on the caller of :meth:`emit`, in the order
    they were added. Each dispatch pass walks a snapshot of its listener list,
    so listeners may subscribe, unsubscribe or emit while being invoked: a
    listener added mid-pass waits for the next emission, and one removed
    mid-pass still runs in the current pass.

    By default a listener that raises aborts the rest of the emission and the
    exception reaches the caller of :meth:`emit`. Set
    ``EmitterConfig.isolate_errors`` to log the failure and keep going.
    """

    def __init__(self, config: Optional[EmitterConfig] = None):
        self._config = config or EmitterConfig()
        self._registrations: Dict[str, Registration] = {}
        self._any_listeners: List[AnyListener] = []
        self._lock = threading.RLock()

    @property
    def config(self) -> EmitterConfig:
        return self._config

    def on(self, event_name: str, listener: Listener) -> None:
        """Bind ``listener`` to every future emission of ``event_name``."""
        with self._lock:
            self._registration(event_name).listeners.append(listener)
        logger.debug("Registered listener for event %r", event_name)

    def on_first(self, event_name: str, listener: Listener) -> None:
        """Bind ``listener`` to the first emission of ``event_name``.

        If the event already fired, ``listener`` is called right away with the
        args of that first emission. It stays in the first-only list so that
        :meth:`off` can still find it, but it is never called again.
        """
        with self._lock:
            registration = self._registration(event_name)
            registration.first_only_listeners.append(listener)
            first_args = registration.first_args

        if first_args is not None:
            self._invoke(event_name, listener, first_args)

    def on_any(self, listener: AnyListener) -> None:
        """Bind ``listener`` to every emission of every event name.

        It is called as ``listener(event_name, *args)``.
        """
        with self._lock:
            self._any_listeners.append(listener)

    def off(self, event_name: Optional[str] = None, listener: Optional[Listener] = None) -> None:
        """Remove listeners.

        - ``off()`` drops every event registration. Listeners added with
          :meth:`on_any` are kept; use :meth:`off_any` for those.
        - ``off(name)`` resets ``name``, so its next emission counts as the first.
        - ``off(name, listener)`` removes every occurrence of ``listener`` from
          ``name``.
        - ``off(listener=listener)`` removes ``listener`` from every event name.

        Removing a listener that is not registered raises
        :class:`InvalidArgumentError` unless ``config.strict_off`` is False.
        """
        if event_name is None and listener is None:
            with self._lock:
                for registration in self._registrations.values():
                    registration.reset()
                self._registrations.clear()
            logger.debug("Cleared all event registrations")
            return

        if listener is None:
            with self._lock:
                self._registration(event_name).reset()
            logger.debug("Reset registration for event %r", event_name)
            return

        with self._lock:
            if event_name is None:
                removed = False
                for registration in self._registrations.values():
                    removed = registration.remove(listener) or removed
            else:
                registration = self._registrations.get(event_name)
                removed = registration is not None and registration.remove(listener)

        if removed:
            return

        if event_name is None:
            message = "Tried to remove a listener that is not registered for any event name."
        else:
            message = f"Tried to remove a non-existent listener for event name '{event_name}'."
        if self._config.strict_off:
            raise InvalidArgumentError(message, event_name=event_name)
        logger.debug(message)

    def off_any(self, listener: AnyListener) -> None:
        """Remove ``listener`` from the any-event list and from every event name."""
        with self._lock:
            remove_from_list(self._any_listeners, listener)
            for registration in self._registrations.values():
                registration.remove(listener)

    def emit(self, event_name: str, *args: Any) -> None:
        """Emit ``event_name`` with ``args`` to all current listeners."""
        first_only: List[Listener] = []
        with self._lock:
            registration = self._registration(event_name)
            if registration.first_args is None:
                first_only = list(registration.first_only_listeners)
                registration.first_args = args
                registration.first_only_listeners.clear()

        if self._config.log_emissions:
            logger.debug("Emitting event %r with %d arg(s)", event_name, len(args))

        for listener in first_only:
            self._invoke(event_name, listener, args)

        with self._lock:
            listeners = list(registration.listeners)
        for listener in listeners:
            self._invoke(event_name, listener, args)

        with self._lock:
            any_listeners = list(self._any_listeners)
        for listener in any_listeners:
            self._invoke(event_name, listener, (event_name, *args))

    def wait_for(self, event_name: str) -> "asyncio.Future[Any]":
        """Return a future resolved with the first arg of the next emission of ``event_name``.

        Must be called with a running event loop.
        """
        return self._wait(event_name, first_only=False)

    def wait_for_first(self, event_name: str) -> "asyncio.Future[Any]":
        """Return a future resolved with the first arg of the first emission of ``event_name``.

        If the event already fired, the returned future is already done.
        """
        return self._wait(event_name, first_only=True)

    def listener_count(self, event_name: Optional[str] = None) -> int:
        with self._lock:
            if event_name is not None:
                registration = self._registrations.get(event_name)
                if registration is None:
                    return 0
                return len(registration.listeners) + len(registration.first_only_listeners)
            total = len(self._any_listeners)
            for registration in self._registrations.values():
                total += len(registration.listeners) + len(registration.first_only_listeners)
            return total

    def event_names(self) -> List[str]:
        with self._lock:
            return list(self._registrations)

    def has_fired(self, event_name: str) -> bool:
        with self._lock:
            registration = self._registrations.get(event_name)
            return registration is not None and registration.fired

    def first_args(self, event_name: str) -> Optional[Tuple[Any, ...]]:
        with self._lock:
            registration = self._registrations.get(event_name)
            return registration.first_args if registration is not None else None

    def _wait(self, event_name: str, first_only: bool) -> "asyncio.Future[Any]":
        loop = asyncio.get_running_loop()
        future: asyncio.Future[Any] = loop.create_future()

        def listener(*args: Any) -> None:
            self._discard(event_name, listener)
            _resolve_future(loop, future, args[0] if args else None)

        def _on_done(done: "asyncio.Future[Any]") -> None:
            if done.cancelled():
                self._discard(event_name, listener)

        future.add_done_callback(_on_done)
        if first_only:
            self.on_first(event_name, listener)
        else:
            self.on(event_name, listener)
        return future

    def _discard(self, event_name: str, listener: Listener) -> None:
        with self._lock:
            registration = self._registrations.get(event_name)
            if registration is not None:
                registration.remove(listener)

    def _invoke(self, event_name: str, listener: Listener, args: Sequence[Any]) -> None:
        if not self._config.isolate_errors:
            listener(*args)
            return
        try:
            listener(*args)
        except Exception:
            logger.exception("Listener for event %r failed", event_name)

    def _registration(self, event_name: str) -> Registration:
        registration = self._registrations.get(event_name)
        if registration is None:
            registration = Registration()
            self._registrations[event_name] = registration
        return registration
