"""Run layouts off the caller's thread, falling back to in-process.

The force simulation can take a while on a few hundred nodes, so callers
with a responsive front end submit it to a separate process. If that path
fails for any reason (pool unavailable or broken, arguments that do not
pickle, timeout, error raised in the worker) the identical computation
runs synchronously in the calling process instead. The fallback is logged
but never surfaced: the caller always gets a layout, possibly later.

Requests are not sequenced: when a second layout is requested before the
first one resolves, discarding the stale result is up to the caller.
"""

from __future__ import annotations

__all__ = ["LayoutWorker"]

import asyncio
import logging
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import Executor, Future, ProcessPoolExecutor

from canvas_layout.errors import LayoutError
from canvas_layout.layout.engine import compute_layout
from canvas_layout.layout.force import ForceSettings
from canvas_layout.parser.model import (
    Edge,
    LayoutAlgorithm,
    LayoutOptions,
    LayoutResult,
    Node,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT: float = 60.0
"""Seconds to wait for an offloaded layout before computing it in-process.

When the wait runs out, the owned worker process is terminated rather than
left to finish the abandoned job.
"""

ProgressCallback = Callable[[int, str], None]


class LayoutWorker:
    """Offloads :func:`compute_layout` to an executor with in-process fallback.

    By default the worker lazily starts a single-process
    ``ProcessPoolExecutor`` and owns it. An injected executor is used as is
    and left to its owner to shut down.
    """

    def __init__(
        self,
        executor: Executor | None = None,
        timeout: float | None = DEFAULT_TIMEOUT,
        force_settings: ForceSettings | None = None,
    ) -> None:
        self._executor = executor
        self._owns_executor = executor is None
        self._timeout = timeout
        self._force_settings = force_settings

    def __enter__(self) -> LayoutWorker:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    def _get_executor(self) -> Executor:
        if self._executor is None:
            logger.debug("Starting layout worker process")
            self._executor = ProcessPoolExecutor(max_workers=1)
        return self._executor

    def _reset(self) -> None:
        """Drop an owned pool so the next request starts a fresh one.

        Shutting the pool down does not stop a job that is already running,
        so the pool's worker processes are terminated as well.
        """
        if not self._owns_executor or self._executor is None:
            return
        executor, self._executor = self._executor, None
        # ProcessPoolExecutor exposes no public handle on its workers.
        processes = list((getattr(executor, "_processes", None) or {}).values())
        executor.shutdown(wait=False, cancel_futures=True)
        for process in processes:
            if process.is_alive():
                logger.debug("Terminating layout worker process %s", process.pid)
                process.terminate()

    def shutdown(self) -> None:
        """Terminate an owned worker pool."""
        if self._owns_executor and self._executor is not None:
            logger.debug("Shutting down layout worker")
            self._executor.shutdown(wait=True, cancel_futures=True)
            self._executor = None

    def submit(
        self,
        algorithm: LayoutAlgorithm | str,
        nodes: Sequence[Node],
        edges: Iterable[Edge] = (),
        options: LayoutOptions | None = None,
    ) -> Future[LayoutResult]:
        """Submit a layout to the executor and return its future."""
        return self._get_executor().submit(
            compute_layout,
            algorithm,
            list(nodes),
            list(edges),
            options,
            None,
            self._force_settings,
        )

    def compute(
        self,
        algorithm: LayoutAlgorithm | str,
        nodes: Sequence[Node],
        edges: Iterable[Edge] = (),
        options: LayoutOptions | None = None,
        progress: ProgressCallback | None = None,
    ) -> LayoutResult:
        """Compute a layout in the worker, blocking until it is available."""
        nodes = list(nodes)
        edges = list(edges)
        try:
            future = self.submit(algorithm, nodes, edges, options)
            result = future.result(timeout=self._timeout)
        except LayoutError:
            raise
        except Exception as e:
            return self._fallback(e, algorithm, nodes, edges, options, progress)
        if progress:
            progress(100, "done")
        return result

    async def compute_async(
        self,
        algorithm: LayoutAlgorithm | str,
        nodes: Sequence[Node],
        edges: Iterable[Edge] = (),
        options: LayoutOptions | None = None,
        progress: ProgressCallback | None = None,
    ) -> LayoutResult:
        """Await a layout from the worker without blocking the event loop.

        The in-process fallback does block the loop while it runs.
        """
        nodes = list(nodes)
        edges = list(edges)
        try:
            future = self.submit(algorithm, nodes, edges, options)
            result = await asyncio.wait_for(
                asyncio.wrap_future(future), timeout=self._timeout
            )
        except LayoutError:
            raise
        except Exception as e:
            return self._fallback(e, algorithm, nodes, edges, options, progress)
        if progress:
            progress(100, "done")
        return result

    def _fallback(
        self,
        error: Exception,
        algorithm: LayoutAlgorithm | str,
        nodes: list[Node],
        edges: list[Edge],
        options: LayoutOptions | None,
        progress: ProgressCallback | None,
    ) -> LayoutResult:
        logger.warning(
            "Offloaded layout failed (%s: %s), computing in-process",
            type(error).__name__, error,
        )
        self._reset()
        return compute_layout(
            algorithm,
            nodes,
            edges,
            options,
            progress=progress,
            force_settings=self._force_settings,
        )
