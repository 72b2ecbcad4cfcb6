"""Announcing font installation and removal to interested listeners."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable

FONT_UPDATE_FOR_POLICY = "usual.event.FONT_UPDATE_FOR_POLICY"
FONT_EVENT_TYPE = "eventType"
FONT_EVENT_FONT_NAMES = "fontFullNames"

_log = logging.getLogger(__name__)


class FontEventType(IntEnum):
    """What happened to the fonts named in an update."""

    INSTALL = 0
    UNINSTALL = 1


@dataclass(frozen=True)
class FontUpdateEvent:
    """A broadcast telling listeners that installed fonts changed."""

    event_type: FontEventType
    font_full_names: str
    action: str = FONT_UPDATE_FOR_POLICY
    ordered: bool = False


class FontEventPublisher:
    """Delivers font update events to every subscribed callback."""

    def __init__(self) -> None:
        self._subscribers: list[Callable[[FontUpdateEvent], object]] = []
        self._lock = threading.Lock()

    def subscribe(self, callback: Callable[[FontUpdateEvent], object]) -> Callable[[], None]:
        """Register a callback; the returned function unregisters it."""
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def publish_font_update(self, event_type: FontEventType, full_names: str) -> FontUpdateEvent:
        """Send an update for the comma-joined full names and return the event sent."""
        event = FontUpdateEvent(FontEventType(event_type), full_names)
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(event)
            except Exception:
                _log.exception("font update subscriber failed")
        return event