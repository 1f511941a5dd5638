"""
Change notification hub.

Surfaces publish batches of ChangeEvents; the layout controller subscribes.
Delivery is synchronous: publish() returns after every subscriber has handled
the batch, so a subscriber that writes back to the surface sees its own
write-back notifications arrive while it is still running.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Sequence

logger = logging.getLogger(__name__)

# Debug flag for verbose delivery logging
DEBUG_NOTIFIER = False


class ChangeKind(Enum):
    STRUCTURAL = "structural"   # Field set or field attributes changed
    GEOMETRY = "geometry"       # Container resized


@dataclass(frozen=True)
class ChangeEvent:
    """Immutable change notification."""
    kind: ChangeKind
    source: str = ""            # Free-form origin, for logging
    detail: Any = None


ChangeCallback = Callable[[Sequence[ChangeEvent]], Any]


def is_structural(events: Sequence[ChangeEvent]) -> bool:
    """A batch with any structural event is structural."""
    return any(event.kind is ChangeKind.STRUCTURAL for event in events)


class ChangeNotifier:
    """Publish/subscribe over change event batches."""

    def __init__(self):
        self._subscribers: List[ChangeCallback] = []

    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        """
        Register a batch callback.

        Returns:
            A function that removes the subscription. Calling it twice is harmless.
        """
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def publish(self, *events: ChangeEvent) -> None:
        """Deliver one batch to every subscriber, in subscription order."""
        if not events:
            return
        if DEBUG_NOTIFIER:
            logger.info(f"📣 PUBLISH: {[f'{e.kind.value}:{e.source}' for e in events]} to {len(self._subscribers)} subscriber(s)")
        # Copy so callbacks may unsubscribe during delivery
        for callback in list(self._subscribers):
            callback(events)

    def structural(self, source: str = "", detail: Any = None) -> None:
        self.publish(ChangeEvent(ChangeKind.STRUCTURAL, source, detail))

    def geometry(self, source: str = "", detail: Any = None) -> None:
        self.publish(ChangeEvent(ChangeKind.GEOMETRY, source, detail))
