"""Super quick in-process event emitter."""

from squee.config import EmitterConfig, load_config
from squee.emitter import EventEmitter, Registration
from squee.errors import InvalidArgumentError
from squee.types import AnyListener, EventReceiver, EventSubmitter, Listener

__version__ = "1.1.1"

Squee = EventEmitter

__all__ = [
    "AnyListener",
    "EmitterConfig",
    "EventEmitter",
    "EventReceiver",
    "EventSubmitter",
    "InvalidArgumentError",
    "Listener",
    "Registration",
    "Squee",
    "load_config",
]
