"""Background fetch task - runs the pipeline off the display thread.

The pipeline runs on a single worker thread. Its result comes back
through a one-shot Future and is applied to the screen by deliver(),
which the display thread calls.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor

from src.orchestrator import Orchestrator, PipelineResult
from src.shell.display import EarthquakeScreen


logger = logging.getLogger(__name__)


class EarthquakeTask:
    """Fetches the first earthquake in the background, then updates a screen.

    A task executes at most once.
    """

    def __init__(self, orchestrator: Orchestrator) -> None:
        self.orchestrator = orchestrator
        self._executor: ThreadPoolExecutor | None = None
        self._future: Future[PipelineResult] | None = None

    def _run(self) -> PipelineResult:
        try:
            return self.orchestrator.process()
        finally:
            self.orchestrator.close()

    def execute(self) -> Future:
        """Start the pipeline on the worker thread.

        Returns:
            Future resolving to the PipelineResult

        Raises:
            RuntimeError: If the task was already executed
        """
        if self._future is not None:
            raise RuntimeError("Cannot execute task: the task has already been executed")

        self._executor = ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix="earthquake-task",
        )
        self._future = self._executor.submit(self._run)
        # Worker thread exits once the single job is done
        self._executor.shutdown(wait=False)
        return self._future

    def deliver(
        self,
        screen: EarthquakeScreen,
        timeout: float | None = None,
    ) -> PipelineResult:
        """Wait for the pipeline and update the screen with its event.

        Call from the display thread. The screen is left untouched if
        there is no event or the screen was torn down meanwhile.

        Args:
            screen: Screen to update
            timeout: Seconds to wait for the pipeline, None to wait forever

        Returns:
            The PipelineResult

        Raises:
            RuntimeError: If execute() was not called
            concurrent.futures.TimeoutError: If the pipeline is still running
        """
        if self._future is None:
            raise RuntimeError("Cannot deliver: the task was never executed")

        result = self._future.result(timeout=timeout)

        if result.event is None:
            logger.info("Nothing to display: %s", result.summary)
            return result

        screen.update_ui(result.event)
        return result
