"""Clipboard polling loop"""

import threading
from enum import Enum
from typing import Optional
from loguru import logger

from ..core.clipboard import ClipboardSampler
from ..core.pipeline import LinkPipeline, PersistOutcome


class LoopState(Enum):
    RUNNING = "running"
    SHUTTING_DOWN = "shutting_down"


class PollLoop:
    """Samples the clipboard on a fixed interval until stopped"""

    def __init__(self, sampler: ClipboardSampler, pipeline: LinkPipeline,
                 interval_ms: int = 5000):
        """
        Initialize poll loop

        Args:
            sampler: Clipboard reader
            pipeline: Change detection and persistence for each reading
            interval_ms: Poll interval in milliseconds
        """
        self.sampler = sampler
        self.pipeline = pipeline
        self.interval = interval_ms / 1000.0  # Convert to seconds
        self.state = LoopState.RUNNING
        self.snapshot = ""
        self._stop_event = threading.Event()

        logger.info(f"Set clipboard poll interval: {interval_ms}ms")

    def stop(self) -> None:
        """Request shutdown; takes effect before the next tick"""
        self._stop_event.set()

    @property
    def stop_requested(self) -> bool:
        return self._stop_event.is_set()

    def tick(self) -> Optional[PersistOutcome]:
        """
        Sample the clipboard once and process the result

        Returns:
            Pipeline outcome, or None if the clipboard held no text

        Raises:
            ClipboardAccessError: If the clipboard cannot be read
            PersistError: If a link cannot be stored
        """
        sample = self.sampler.read()
        if not sample.has_text:
            return None

        self.snapshot, outcome = self.pipeline.process(sample.text, self.snapshot)
        return outcome

    def run(self) -> None:
        """
        Poll until stop() is called

        The first tick runs immediately. Errors from a tick end the loop
        and propagate to the caller.
        """
        logger.debug("Poll loop started")

        while self.state is LoopState.RUNNING:
            if self._stop_event.is_set():
                break

            self.tick()

            # Returns True as soon as stop() is called, False when the interval elapses
            if self._stop_event.wait(self.interval):
                break

        self.state = LoopState.SHUTTING_DOWN
        logger.info("Received interrupt, shutting down")
