"""Debounced auto-save for edited post content.

Rapid edits restart a single timer; only the content present when the timer
finally fires is written. This is the only write-coalescing policy in the
application.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)

DEFAULT_AUTOSAVE_DELAY = 1.0


class DraftAutoSaver:
    """Coalesce bursts of ``schedule(content)`` calls into one ``save(content)``.

    ``save`` runs on a timer thread. A failing save is logged and swallowed:
    the editor keeps the content in memory and the next edit retries.
    """

    def __init__(self, save: Callable[[str], None], delay: float = DEFAULT_AUTOSAVE_DELAY):
        self._save = save
        self._delay = delay
        self._lock = threading.Lock()
        self._save_lock = threading.RLock()
        self._timer: threading.Timer | None = None
        self._pending: str | None = None
        self.saves = 0

    @property
    def has_pending(self) -> bool:
        with self._lock:
            return self._pending is not None

    def schedule(self, content: str) -> None:
        with self._lock:
            self._pending = content
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self._delay, self._fire)
            self._timer.daemon = True
            self._timer.start()

    def flush(self) -> bool:
        """Write pending content now. Returns True when something was saved.

        Waits for a save already running on the timer thread, so nothing
        lands after flush() returns.
        """
        with self._lock:
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()
        return self._fire()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._pending = None

    def _fire(self) -> bool:
        # Saves run one at a time, and each takes whatever is pending when its
        # turn comes, so an older save can never land after a newer one.
        with self._save_lock:
            with self._lock:
                content, self._pending = self._pending, None
                if self._timer is threading.current_thread():
                    self._timer = None
            if content is None:
                return False
            try:
                self._save(content)
            except Exception as e:
                logger.warning("Auto-save failed (%s): %s", type(e).__name__, e)
                return False
            self.saves += 1
        logger.debug("Auto-saved draft (%d chars)", len(content))
        return True
