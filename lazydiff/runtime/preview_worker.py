"""Background worker that loads and renders diff previews."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from queue import Empty, Queue

from ..tree_model.types import ChangedPath

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreviewRequest:
    """One preview job, tagged with the id ``transition`` assigned to it."""

    request_id: int
    file: ChangedPath
    width: int


@dataclass(frozen=True)
class PreviewResult:
    """Completed preview from the background worker."""

    request: PreviewRequest
    content: str


class PreviewScheduler:
    """Single-threaded latest-request-wins preview scheduler.

    Only the newest pending request is kept; older ones that have not
    started are dropped. ``build_preview(file, width)`` must return the text
    to show, including any one-line error message.
    """

    def __init__(self, build_preview: Callable[[ChangedPath, int], str]) -> None:
        self._build_preview = build_preview
        self._lock = threading.Lock()
        self._pending: PreviewRequest | None = None
        self._running = False
        self._results: Queue[PreviewResult] = Queue()

    def _worker(self) -> None:
        while True:
            with self._lock:
                request = self._pending
                self._pending = None
                if request is None:
                    self._running = False
                    return

            try:
                content = self._build_preview(request.file, request.width)
            except Exception:
                logger.exception("preview for %s failed", request.file.path)
                content = f"error: could not render {request.file.path}"
            self._results.put(PreviewResult(request=request, content=content))

    def schedule(self, request: PreviewRequest) -> None:
        """Queue or replace pending preview work."""
        with self._lock:
            self._pending = request
            if self._running:
                return
            self._running = True

        worker = threading.Thread(
            target=self._worker,
            name="lazydiff-preview",
            daemon=True,
        )
        worker.start()

    def drain_results(self) -> list[PreviewResult]:
        """Drain all completed preview results."""
        out: list[PreviewResult] = []
        while True:
            try:
                out.append(self._results.get_nowait())
            except Empty:
                break
        return out


__all__ = [
    "PreviewRequest",
    "PreviewResult",
    "PreviewScheduler",
]
