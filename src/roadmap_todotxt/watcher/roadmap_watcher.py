"""
Polling roadmap file watcher.

Editors save in several steps (truncate, write, rename), so a change only
fires once the file's (mtime, size) has stayed the same for a full poll
interval.

The watcher runs a daemon thread that:
1. Stats the roadmap every poll interval
2. Marks the roadmap dirty when (mtime, size) differs from the last poll
3. Calls on_change once a dirty roadmap has been stable for one interval
"""

import logging
import threading
from pathlib import Path
from typing import Callable, Optional, Tuple

log = logging.getLogger(__name__)

Snapshot = Optional[Tuple[float, int]]


class RoadmapWatcher:
    """
    Calls ``on_change()`` once per settled edit of a single roadmap file.

    Usage:
        watcher = RoadmapWatcher(roadmap_path, regenerate, poll_interval=0.5)
        watcher.start()
        ...
        watcher.stop()
    """

    def __init__(
        self,
        roadmap_path: Path,
        on_change: Callable[[], object],
        poll_interval: float = 0.5,
    ) -> None:
        self._roadmap_path = roadmap_path
        self._on_change = on_change
        self._poll_interval = poll_interval
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

        self._known: Snapshot = None
        self._dirty = False

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the polling thread (daemon)."""
        log.info(
            "Watching %s for changes (polling every %.1fs)",
            self._roadmap_path,
            self._poll_interval,
        )
        # The current state is the baseline; nothing fires on startup
        self._known = self._snapshot()
        self._dirty = False
        self._stop_event.clear()

        self._thread = threading.Thread(
            target=self._poll_loop, daemon=True, name="roadmap-watcher"
        )
        self._thread.start()

    def stop(self) -> None:
        """Stop polling; waits for an in-flight regeneration to finish."""
        self._stop_event.set()
        thread, self._thread = self._thread, None
        if thread is not None:
            thread.join(timeout=self._poll_interval + 2)
            log.info("Stopped watching %s", self._roadmap_path)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until stop() is called; returns False on timeout."""
        return self._stop_event.wait(timeout)

    def poll_once(self) -> bool:
        """
        Run a single poll cycle.

        Returns:
            True if on_change was called during this cycle
        """
        current = self._snapshot()

        if current != self._known:
            if current is None:
                log.warning("Roadmap disappeared: %s", self._roadmap_path)
            else:
                log.debug("Change detected in %s", self._roadmap_path)
            self._known = current
            self._dirty = current is not None
            return False

        if not self._dirty:
            return False

        self._dirty = False
        log.info("Detected change in %s. Regenerating", self._roadmap_path)
        self._on_change()
        return True

    def _poll_loop(self) -> None:
        # Event.wait() turns True once stop() is called
        while not self._stop_event.wait(self._poll_interval):
            try:
                self.poll_once()
            except Exception:
                log.exception("Poll of %s failed", self._roadmap_path)

    def _snapshot(self) -> Snapshot:
        """Return (mtime, size) of the roadmap, or None if it is missing."""
        try:
            st = self._roadmap_path.stat()
        except OSError:
            return None
        return st.st_mtime, st.st_size
