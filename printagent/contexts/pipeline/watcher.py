"""
Job Store watcher.

Observes the queue directory with watchdog and runs the pipeline once per
new file, each as its own asyncio task. Files already in the queue at
startup are dispatched once when the watcher starts.
"""

import asyncio
import sys
from pathlib import Path
from typing import Awaitable, Callable, Optional, Set

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from printagent.contexts.pipeline.logger import _log_debug, _log_error, _log_info
from printagent.contexts.pipeline.outcome import JobOutcome

JobHandler = Callable[[Path], Awaitable[JobOutcome]]

# inotify reports when a writer closes the file; other backends only report creation
CLOSE_EVENTS_SUPPORTED = sys.platform.startswith("linux")


def is_job_file(path: Path) -> bool:
    """Hidden files (editor swap files, partial uploads) are not jobs."""
    return not path.name.startswith(".")


class _QueueEventHandler(FileSystemEventHandler):
    """Forwards new-file events from the observer thread to the watcher's loop."""

    def __init__(self, watcher: "JobStoreWatcher"):
        super().__init__()
        self._watcher = watcher

    def on_created(self, event: FileSystemEvent) -> None:
        # A new file may still be empty; wait for the writer to close it when we can
        if not event.is_directory and not self._watcher.wait_for_close:
            self._watcher.notify(Path(event.src_path))

    def on_closed(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._watcher.notify(Path(event.src_path))

    def on_moved(self, event: FileSystemEvent) -> None:
        # Files renamed into the queue (atomic drop) arrive as moves
        if not event.is_directory:
            self._watcher.notify(Path(event.dest_path))


class JobStoreWatcher:
    """
    Spawns one pipeline task per file appearing in the queue directory.

    Files are dispatched once their writer closes them (inotify), or on
    creation where the platform reports no close events. Renames into the
    queue are dispatched immediately. There is no ordering between jobs. With
    max_concurrent_jobs > 0, at most that many jobs run at once and the rest
    wait their turn; 0 means unbounded.
    """

    def __init__(
        self,
        queue_path: Path,
        handle_job: JobHandler,
        max_concurrent_jobs: int = 0,
        wait_for_close: bool = CLOSE_EVENTS_SUPPORTED,
    ):
        self.queue_path = Path(queue_path)
        self.handle_job = handle_job
        self.max_concurrent_jobs = max_concurrent_jobs
        self.wait_for_close = wait_for_close

        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._semaphore: Optional[asyncio.Semaphore] = None
        self._in_flight: Set[Path] = set()
        self._tasks: Set[asyncio.Task] = set()

    @property
    def in_flight(self) -> Set[Path]:
        return set(self._in_flight)

    def notify(self, path: Path) -> None:
        """Thread-safe: schedule dispatch of `path` on the watcher's event loop."""
        if self._loop is None or self._loop.is_closed():
            return
        self._loop.call_soon_threadsafe(self.dispatch, path)

    def dispatch(self, path: Path) -> Optional[asyncio.Task]:
        """
        Start processing a queue file unless it is ignored or already running.

        Must be called on the watcher's event loop.
        """
        path = Path(path)
        if not is_job_file(path) or path in self._in_flight or not path.is_file():
            return None

        self._in_flight.add(path)
        task = asyncio.get_running_loop().create_task(self._run(path))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(self, path: Path) -> Optional[JobOutcome]:
        try:
            if self._semaphore is not None:
                async with self._semaphore:
                    return await self.handle_job(path)
            return await self.handle_job(path)
        except Exception as e:
            # process_job handles job failures; anything here is a bug, keep the watcher alive
            _log_error(f"Unhandled error processing {path}: {e!r}")
            return None
        finally:
            self._in_flight.discard(path)

    def dispatch_existing(self) -> int:
        """Dispatch files already sitting in the queue. Returns how many were started."""
        started = 0
        for path in sorted(self.queue_path.iterdir()):
            if self.dispatch(path) is not None:
                started += 1
        return started

    async def drain(self) -> None:
        """Wait for every in-flight job to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def run(self, stop_event: Optional[asyncio.Event] = None) -> None:
        """
        Watch the queue until stop_event is set (or forever), then finish in-flight jobs.

        Args:
            stop_event: Event that ends the watch when set
        """
        self._loop = asyncio.get_running_loop()
        if self.max_concurrent_jobs > 0:
            self._semaphore = asyncio.Semaphore(self.max_concurrent_jobs)
        stop_event = stop_event or asyncio.Event()

        observer = Observer()
        observer.schedule(_QueueEventHandler(self), str(self.queue_path), recursive=False)
        observer.start()
        _log_info(f"Watching {self.queue_path}")

        try:
            # Observer is already running, so files dropped during the scan are not missed;
            # duplicates are filtered by the in-flight set
            started = self.dispatch_existing()
            if started:
                _log_info(f"Dispatched {started} job(s) already in the queue")
            await stop_event.wait()
        finally:
            observer.stop()
            observer.join()
            _log_debug(f"Observer stopped; waiting for {len(self._tasks)} in-flight job(s)")
            await self.drain()
            self._loop = None
