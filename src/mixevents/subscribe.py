"""
Capability protocols shared by every emitter host.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable


class Listener(Protocol):
    """
    Protocol for listeners. The first argument is the receiver: the context
    given at registration, or the emitting host.
    """

    def __call__(self, receiver: Any, *args: Any, **kwargs: Any) -> Any: ...


@runtime_checkable
class Subscribable(Protocol):
    """
    Anything listeners can subscribe to.
    Each method returns the object itself to allow chaining.
    """

    def on(self, event: str, callback: Listener, context: Any = None) -> Any: ...

    def once(self, event: str, callback: Listener, context: Any = None) -> Any: ...

    def off(
        self,
        event: Optional[str] = None,
        callback: Optional[Listener] = None,
        context: Any = None,
    ) -> Any: ...
