"""In-process comment subscriptions.

``subscribe`` hands back a Subscription; the subscriber owns it and must call
``cancel()`` when it is done listening. Nothing is released implicitly.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, List

logger = logging.getLogger(__name__)

Listener = Callable[[List[dict]], None]


class Subscription:
    def __init__(self, feed: "CommentFeed", race_id: str, listener: Listener):
        self._feed = feed
        self.race_id = race_id
        self.listener = listener
        self.active = True

    def cancel(self) -> None:
        if self.active:
            self.active = False
            self._feed._remove(self)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc) -> None:
        self.cancel()


class CommentFeed:
    def __init__(self):
        self._lock = threading.Lock()
        self._subs: Dict[str, List[Subscription]] = {}

    def subscribe(self, race_id: str, listener: Listener) -> Subscription:
        sub = Subscription(self, race_id, listener)
        with self._lock:
            self._subs.setdefault(race_id, []).append(sub)
        return sub

    def _remove(self, sub: Subscription) -> None:
        with self._lock:
            subs = self._subs.get(sub.race_id, [])
            if sub in subs:
                subs.remove(sub)
            if not subs:
                self._subs.pop(sub.race_id, None)

    def subscriber_count(self, race_id: str) -> int:
        with self._lock:
            return len(self._subs.get(race_id, []))

    def publish(self, race_id: str, comments: List[dict]) -> None:
        """Deliver the full, ordered comment list of ``race_id`` to its listeners."""
        with self._lock:
            subs = list(self._subs.get(race_id, []))
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.listener(comments)
            except Exception:
                # logged; delivery to the remaining listeners continues
                logger.exception("Comment listener for race %s failed", race_id)
