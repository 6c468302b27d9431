"""Recompile-on-save loop built on watchdog."""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .render import Renderer

_LOGGER = logging.getLogger(__name__)

DEFAULT_DEBOUNCE = 0.1


class WatchError(Exception):
    """Raised when the source directory cannot be watched."""
    pass


class Debouncer:
    """Collapse a burst of triggers into one call, ``delay`` seconds after the last."""

    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self.delay = delay
        self._callback = callback
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()

    def trigger(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.delay, self._callback)
            self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None


class SourceChangeHandler(FileSystemEventHandler):
    """Forward writes to a single file; everything else in the directory is ignored."""

    def __init__(self, target: Path | str, on_change: Callable[[], None]) -> None:
        super().__init__()
        self.target = os.path.abspath(target)
        self._on_change = on_change

    def _matches(self, path: str | bytes) -> bool:
        return os.path.abspath(os.fsdecode(path)) == self.target

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._matches(event.src_path):
            _LOGGER.debug("Modified: %s", event.src_path)
            self._on_change()

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory and self._matches(event.src_path):
            _LOGGER.debug("Created: %s", event.src_path)
            self._on_change()

    def on_moved(self, event: FileSystemEvent) -> None:
        # Editors that save via write-to-temp + rename.
        if not event.is_directory and self._matches(event.dest_path):
            _LOGGER.debug("Replaced: %s", event.dest_path)
            self._on_change()


class Watcher:
    """Watch ``file_path`` and call ``run_compile`` after each (debounced) save.

    ``run_compile`` is expected to render its own output and may raise; any
    exception is printed and the watch continues.
    """

    def __init__(
        self,
        run_compile: Callable[[], object],
        renderer: Renderer,
        file_path: Path | str,
        *,
        debounce: float = DEFAULT_DEBOUNCE,
        observer_factory: Callable[[], Observer] | None = None,
    ) -> None:
        self.file_path = str(file_path)
        self.abs_path = os.path.abspath(file_path)
        self.renderer = renderer
        self._run_compile = run_compile
        self._run_lock = threading.Lock()
        self._debouncer = Debouncer(debounce, self._rerun)
        self.handler = SourceChangeHandler(self.abs_path, self._debouncer.trigger)
        self._observer_factory = observer_factory or Observer
        self._observer: Observer | None = None

    def start(self) -> None:
        directory = os.path.dirname(self.abs_path)
        observer = self._observer_factory()
        try:
            observer.schedule(self.handler, directory, recursive=False)
            observer.start()
        except OSError as exc:
            raise WatchError(f"failed to watch directory: {exc}") from exc
        self._observer = observer
        _LOGGER.debug("Watching %s for changes to %s", directory, os.path.basename(self.abs_path))

    def stop(self) -> None:
        self._debouncer.cancel()
        if self._observer is not None:
            self._observer.stop()
            self._observer.join()
            self._observer = None

    def compile_once(self) -> None:
        self._run(fresh_screen=False)

    def _rerun(self) -> None:
        self._run(fresh_screen=True)

    def _run(self, fresh_screen: bool) -> None:
        with self._run_lock:
            if fresh_screen:
                self.renderer.clear()
                self.renderer.rerun_banner(self.file_path)
            try:
                self._run_compile()
            except Exception as exc:
                _LOGGER.debug("Compile of %s failed", self.file_path, exc_info=True)
                self.renderer.error(str(exc))

    def wait(self, stop_event: threading.Event | None = None) -> None:
        """Block until ``stop_event`` is set; Ctrl+C propagates to the caller."""
        stop_event = stop_event or threading.Event()
        while not stop_event.wait(1.0):
            pass


def watch(
    run_compile: Callable[[], object],
    renderer: Renderer,
    file_path: Path | str,
    *,
    compiler: str,
    args: str,
    server: str,
    debounce: float = DEFAULT_DEBOUNCE,
    stop_event: threading.Event | None = None,
) -> None:
    """Compile now, then again after every save of ``file_path``."""
    watcher = Watcher(run_compile, renderer, file_path, debounce=debounce)
    watcher.start()

    try:
        renderer.watch_banner(str(file_path), compiler, args, server)
        watcher.compile_once()
        watcher.wait(stop_event)
    except KeyboardInterrupt:
        _LOGGER.debug("Interrupted; stopping watcher")
    finally:
        watcher.stop()


__all__ = ["Debouncer", "SourceChangeHandler", "WatchError", "Watcher", "watch"]
