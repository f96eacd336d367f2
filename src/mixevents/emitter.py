"""
Event emitter mixin and a standalone emitter built on it.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional, TypeVar

from . import core
from .core import EmitterState
from .subscribe import Listener

_Self = TypeVar("_Self", bound="EventEmitterMixin")


class EventEmitterMixin:
    """
    Adds `on`, `once`, `off` and the protected `_emit` to any class.

    The listener state is created on first use and kept on the instance as
    `_emitter_state`, so hosts need no cooperative `__init__`. Dispatch is
    protected: hosts decide when their events fire.
    """

    @property
    def _emitter_state(self) -> EmitterState:
        try:
            return self.__dict__["_emitter_state"]
        except KeyError:
            state = self.__dict__["_emitter_state"] = EmitterState()
            return state

    # -------------------- registration API --------------------
    def on(self: _Self, event: str, callback: Listener, context: Any = None) -> _Self:
        """
        Register a listener for an event.
        Registering the same (callback, context) pair twice is a no-op.

        Args:
            event (str): The event to register the listener for.
            callback (Listener): Called as callback(receiver, *args, **kwargs).
            context (Any, optional): Receiver passed to the callback.
                                     Defaults to None, meaning this instance.

        Returns:
            The instance itself, to allow chaining.
        """
        core.on(self._emitter_state, event, callback, context)
        return self

    def once(self: _Self, event: str, callback: Listener, context: Any = None) -> _Self:
        """
        Register a listener that is removed after its first call.
        Same arguments and duplicate rules as `on`.
        """
        core.once(self._emitter_state, event, callback, context)
        return self

    def off(
        self: _Self,
        event: Optional[str] = None,
        callback: Optional[Listener] = None,
        context: Any = None,
    ) -> _Self:
        """
        Unregister listeners.
        Without arguments, removes everything; with only `event`, removes all
        listeners of that event; otherwise removes the matching listener.

        Returns:
            The instance itself, to allow chaining.
        """
        core.off(self._emitter_state, event, callback, context)
        return self

    def list_receivers(self, event: str) -> List[Listener]:
        """Return the live callbacks registered for `event`, in dispatch order."""
        return core.list_receivers(self._emitter_state, event)

    # -------------------- decorator --------------------
    def receiver(
        self, event: str, *, once: bool = False, context: Any = None
    ) -> Callable[[Listener], Listener]:
        """
        Decorator to register a function as a listener for `event`.

        Example:
        @emitter.receiver("ready")
        def on_ready(receiver, *args, **kwargs):
            ...
        """

        def wrapper(func: Listener) -> Listener:
            if once:
                self.once(event, func, context)
            else:
                self.on(event, func, context)
            return func

        return wrapper

    # -------------------- dispatch --------------------
    def _emit(self, event: str, *args: Any, **kwargs: Any) -> None:
        """
        Dispatch `event` to its listeners, in registration order.
        Exceptions raised by listeners propagate.
        """
        core.emit(self._emitter_state, self, event, *args, **kwargs)


class EventEmitter(EventEmitterMixin):
    """
    An isolated emitter for code that owns it outright (tests, plugins, etc.)
    and may therefore dispatch publicly.
    """

    def emit(self, event: str, *args: Any, **kwargs: Any) -> None:
        """Dispatch `event`; see `EventEmitterMixin._emit`."""
        self._emit(event, *args, **kwargs)
