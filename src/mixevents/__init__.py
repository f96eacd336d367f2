"""
Mixevents
---------

Mixable synchronous event emitter for Python.

Features:

- `EventEmitterMixin` gives any class `on()`, `once()`, `off()` and a
  protected `_emit()`, with no base class to specialize.
- Listeners may add or remove listeners (themselves included) while an
  event is being dispatched; removed listeners are never called afterwards
  and listeners added mid-dispatch are called in that same dispatch.
- `(callback, context)` pairs are unique per event; the context is handed
  to the callback as its first argument.
- Free functions in `mixevents.core` operate on an explicit `EmitterState`
  for hosts that prefer composition.
- `EventEmitter` class for isolated emitters with a public `emit()`.
- No dependencies.
"""

from .core import EmitterState, ListenerRecord
from .emitter import EventEmitter, EventEmitterMixin
from .subscribe import Listener, Subscribable

__all__ = [
    "EventEmitterMixin",
    "EventEmitter",
    "EmitterState",
    "ListenerRecord",
    "Listener",
    "Subscribable",
]
