"""
Hot reload for dialogue scripts.

Watches a ScriptLibrary's directory and keeps the library in sync while
writers edit scripts. Uses watchdog for cross-platform file system
monitoring.

Conversations that already exist keep the lines they were built with;
only conversations created after a reload see the new script.
"""

from __future__ import annotations

import logging
import os
import threading
from enum import Enum, auto
from pathlib import Path
from typing import Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from parley.resources.library import SCRIPT_EXTENSIONS, ScriptLibrary

logger = logging.getLogger(__name__)


class ScriptChange(Enum):
    """Types of script file change."""
    CREATED = auto()
    MODIFIED = auto()
    DELETED = auto()
    MOVED = auto()


class ScriptEventHandler(FileSystemEventHandler):
    """
    Applies file system events to a ScriptLibrary.

    Filters to script files and debounces rapid changes to the same path:
    a reload runs once the path has been quiet for debounce_seconds, so
    it always reads the last write of a save. A debounce of zero reloads
    on every event.
    """

    def __init__(self, library: ScriptLibrary, debounce_seconds: float = 0.5):
        super().__init__()
        self.library = library
        self.debounce_seconds = debounce_seconds

        # path -> (timer, latest change)
        self._pending: dict[str, tuple[threading.Timer, ScriptChange]] = {}
        self._lock = threading.Lock()

    def _should_process(self, path: str) -> bool:
        """Check if this file is a script."""
        p = Path(path)
        if p.suffix.lower() not in SCRIPT_EXTENSIONS:
            return False

        # Hidden and editor temp files
        name = p.name
        if name.startswith('.') or name.startswith('~') or name.endswith('~'):
            return False

        return True

    @property
    def pending(self) -> list[str]:
        """Paths waiting for their reload."""
        with self._lock:
            return sorted(self._pending)

    def _schedule(self, change: ScriptChange, path: str) -> None:
        if self.debounce_seconds <= 0:
            self._reload(change, path)
            return

        with self._lock:
            previous = self._pending.pop(path, None)
            if previous is not None:
                previous[0].cancel()

            timer = threading.Timer(self.debounce_seconds, self._fire, args=(path,))
            timer.daemon = True
            self._pending[path] = (timer, change)
            timer.start()

    def _fire(self, path: str) -> None:
        with self._lock:
            pending = self._pending.pop(path, None)
        if pending is not None:
            self._reload(pending[1], path)

    def _cancel(self, path: str) -> None:
        with self._lock:
            pending = self._pending.pop(path, None)
        if pending is not None:
            pending[0].cancel()

    def _reload(self, change: ScriptChange, path: str) -> None:
        if self.library.reload(path):
            logger.info(f"Script reloaded ({change.name.lower()}): {path}")

    def flush(self) -> None:
        """Run every pending reload now."""
        with self._lock:
            pending = list(self._pending.items())
            self._pending.clear()

        for path, (timer, change) in pending:
            timer.cancel()
            self._reload(change, path)

    def cancel_all(self) -> None:
        """Drop every pending reload."""
        with self._lock:
            pending = list(self._pending.values())
            self._pending.clear()

        for timer, _ in pending:
            timer.cancel()

    def _apply(self, change: ScriptChange, path: str) -> None:
        if not self._should_process(path):
            return

        if change is ScriptChange.DELETED:
            self._cancel(path)
            if self.library.discard(path):
                logger.info(f"Script removed: {path}")
            return

        self._schedule(change, path)

    def on_created(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        self._apply(ScriptChange.CREATED, os.fsdecode(event.src_path))

    def on_modified(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        self._apply(ScriptChange.MODIFIED, os.fsdecode(event.src_path))

    def on_deleted(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        self._apply(ScriptChange.DELETED, os.fsdecode(event.src_path))

    def on_moved(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        self._apply(ScriptChange.DELETED, os.fsdecode(event.src_path))
        self._apply(ScriptChange.MOVED, os.fsdecode(event.dest_path))


class ScriptWatcher:
    """
    Watches a script library's directory for changes.

    Usage:
        library = ScriptLibrary("game/data/dialogue")
        library.load_all()

        with ScriptWatcher(library):
            game.run()
    """

    def __init__(self, library: ScriptLibrary, debounce_seconds: float = 0.5):
        self.library = library
        self.handler = ScriptEventHandler(library, debounce_seconds)
        self._observer: Optional[Observer] = None

    @property
    def is_running(self) -> bool:
        return self._observer is not None

    def start(self) -> bool:
        """
        Start watching for changes.

        Returns:
            True if the watcher is running
        """
        if self._observer is not None:
            return True

        path = self.library.path
        if not path.is_dir():
            logger.warning(f"Cannot watch non-existent directory: {path}")
            return False

        self._observer = Observer()
        self._observer.schedule(self.handler, str(path), recursive=False)
        self._observer.start()
        logger.info(f"Script watcher started on {path}")
        return True

    def stop(self) -> None:
        """Stop watching for changes."""
        if self._observer is None:
            return

        self._observer.stop()
        self._observer.join(timeout=2.0)
        self._observer = None
        self.handler.cancel_all()
        logger.info("Script watcher stopped")

    def __enter__(self) -> ScriptWatcher:
        self.start()
        return self

    def __exit__(self, *args) -> None:
        self.stop()
