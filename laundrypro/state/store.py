"""
Observable application state.

A store owns one immutable state snapshot. Only the store's own operations
replace it; readers either look at ``state`` or subscribe to be called with
every new snapshot.
"""
import dataclasses
import logging
from typing import Callable, Generic, List, TypeVar

logger = logging.getLogger(__name__)

S = TypeVar("S")

Listener = Callable[[S], None]


class Store(Generic[S]):
    """Base class for the session and entity stores."""

    name: str = "store"

    def __init__(self, initial_state: Callable[[], S]):
        self._initial_state = initial_state
        self._state: S = initial_state()
        self._listeners: List[Listener] = []
        # Bumped on reset so responses issued before it are dropped
        self._generation = 0

    @property
    def state(self) -> S:
        return self._state

    @property
    def generation(self) -> int:
        """Changes on every reset; work started under an older value is stale."""
        return self._generation

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def reset(self) -> None:
        """Return to the initial empty state."""
        self._generation += 1
        self._replace(self._initial_state())

    def _set(self, **changes) -> S:
        return self._replace(dataclasses.replace(self._state, **changes))

    def _replace(self, new_state: S) -> S:
        self._state = new_state
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception as e:
                logger.error(f"{self.name} listener failed: {e}", exc_info=True)
        return new_state
