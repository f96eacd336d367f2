"""
mixevents.core
--------------

Listener bookkeeping and dispatch for a mixable event emitter.

Every function takes the `EmitterState` it operates on explicitly, so any
host can own one and delegate to these functions without inheriting from
anything.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .subscribe import Listener

logger = logging.getLogger(__name__)


@dataclass
class ListenerRecord:
    """A single subscription. A record whose callback is None is a tombstone."""

    callback: Optional[Listener]
    context: Any = None
    once: bool = False

    @property
    def alive(self) -> bool:
        return self.callback is not None

    def matches(self, callback: Listener, context: Any) -> bool:
        # bound methods are recreated on each attribute access, so compare by ==
        return self.callback == callback and self.context is context

    def tombstone(self) -> None:
        self.callback = None
        self.context = None

    def call(self, host: Any, *args: Any, **kwargs: Any) -> Any:
        """
        Invoke the callback with its receiver as first argument.
        The receiver is the record's context, or `host` when there is none.
        """
        receiver = self.context if self.context is not None else host
        return self.callback(receiver, *args, **kwargs)


@dataclass
class EmitterState:
    """
    Listeners of one host, keyed by event name.

    `depth` counts the dispatch loops currently running on this state; while
    it is non-zero removals leave tombstones instead of shrinking lists.
    """

    listeners: Dict[str, List[ListenerRecord]] = field(default_factory=dict)
    depth: int = 0

    @property
    def firing(self) -> bool:
        return self.depth > 0


# -------------------- registration --------------------
def _register(
    state: EmitterState, event: str, callback: Listener, context: Any, once: bool
) -> None:
    if not callable(callback):
        raise TypeError("callback must be callable")

    records = state.listeners.setdefault(event, [])
    if listener_index(state, event, callback, context) != -1:
        logger.debug("Listener %r already registered for %r", callback, event)
        return
    records.append(ListenerRecord(callback, context, once))


def on(state: EmitterState, event: str, callback: Listener, context: Any = None) -> None:
    """
    Register `callback` for `event`.
    Registering the same (callback, context) pair twice is a no-op.

    Args:
        state (EmitterState): The state to register into.
        event (str): The event name.
        callback (Listener): Called as callback(receiver, *args, **kwargs).
        context (Any, optional): Receiver passed to the callback.
                                 Defaults to None, meaning the host.

    Raises:
        TypeError: If `callback` is not callable.
    """
    _register(state, event, callback, context, once=False)


def once(state: EmitterState, event: str, callback: Listener, context: Any = None) -> None:
    """
    Register `callback` for `event`, removing it right after its first call.
    An existing registration of the same pair is left untouched, whatever
    its `once` flag.

    Args:
        state (EmitterState): The state to register into.
        event (str): The event name.
        callback (Listener): Called as callback(receiver, *args, **kwargs).
        context (Any, optional): Receiver passed to the callback.
                                 Defaults to None, meaning the host.

    Raises:
        TypeError: If `callback` is not callable.
    """
    _register(state, event, callback, context, once=True)


# -------------------- removal --------------------
def off(
    state: EmitterState,
    event: Optional[str] = None,
    callback: Optional[Listener] = None,
    context: Any = None,
) -> None:
    """
    Unregister listeners.

    - off(state): remove every listener of every event.
    - off(state, event): remove every listener of `event`.
    - off(state, event, callback[, context]): remove that single listener.

    Unknown events or listeners are ignored.
    """
    if callback is None:
        clear_listeners(state, event)
        return

    index = listener_index(state, event, callback, context)
    if index == -1:
        return

    records = state.listeners[event]
    if state.firing:
        logger.debug("Tombstoning listener %r of %r during dispatch", callback, event)
        records[index].tombstone()
    elif len(records) == 1:
        del state.listeners[event]
    else:
        del records[index]


def clear_listeners(state: EmitterState, event: Optional[str] = None) -> None:
    """
    Remove all listeners of `event`, or of every event if `event` is None.

    While firing, lists are truncated in place so a running dispatch loop
    sees an empty list and stops.
    """
    if event is not None:
        records = state.listeners.get(event)
        if records is None:
            return
        if state.firing:
            del records[:]
        else:
            del state.listeners[event]
        logger.debug("Cleared listeners of %r", event)
        return

    if state.firing:
        for records in state.listeners.values():
            del records[:]
    else:
        state.listeners = {}
    logger.debug("Cleared all listeners")


# -------------------- lookup --------------------
def listener_index(
    state: EmitterState, event: Optional[str], callback: Listener, context: Any = None
) -> int:
    """
    Return the index of the record matching (callback, context) in the list
    of `event`, scanning from the end, or -1 when there is none.
    """
    records = state.listeners.get(event)
    if records:
        for index in range(len(records) - 1, -1, -1):
            if records[index].matches(callback, context):
                return index
    return -1


def list_receivers(state: EmitterState, event: str) -> List[Listener]:
    """Return the live callbacks registered for `event`, in dispatch order."""
    return [r.callback for r in state.listeners.get(event, []) if r.alive]


# -------------------- dispatch --------------------
def emit(state: EmitterState, host: Any, event: str, *args: Any, **kwargs: Any) -> None:
    """
    Dispatch `event` to its listeners in registration order.

    The list is walked by live index and compacted as it goes: once-records
    are tombstoned after their call and tombstones are dropped when reached.
    Listeners appended during the dispatch are therefore called within it,
    and listeners removed before being reached are not.
    Exceptions raised by listeners propagate and end the dispatch.

    Args:
        state (EmitterState): The state holding the listeners.
        host (Any): Receiver for records registered without a context.
        event (str): The event to dispatch.
        *args: Positional arguments forwarded to every listener.
        **kwargs: Keyword arguments forwarded to every listener.
    """
    records = state.listeners.get(event)
    if records is None:
        return

    state.depth += 1
    try:
        index = 0
        while index < len(records):
            record = records[index]
            if not record.alive:
                del records[index]
                continue
            record.call(host, *args, **kwargs)
            if record.once:
                # dropped when the cursor comes back to it
                record.tombstone()
            else:
                index += 1

        # a reentrant dispatch may already have replaced or dropped the key
        if not records and state.listeners.get(event) is records:
            del state.listeners[event]
    finally:
        state.depth -= 1
