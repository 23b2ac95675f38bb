"""Clipboard sampling for the poll loop"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional
import pyperclip
from loguru import logger

from ..errors import ClipboardAccessError


class SampleOutcome(Enum):
    """What a clipboard read produced"""
    TEXT = "text"
    EMPTY_OR_NON_TEXT = "empty_or_non_text"


@dataclass(frozen=True)
class SampleResult:
    outcome: SampleOutcome
    text: Optional[str] = None

    @property
    def has_text(self) -> bool:
        return self.outcome is SampleOutcome.TEXT


EMPTY = SampleResult(SampleOutcome.EMPTY_OR_NON_TEXT)


class ClipboardSampler:
    """Reads the current clipboard text through pyperclip"""

    def __init__(self, paste: Optional[Callable[[], Optional[str]]] = None):
        """
        Initialize clipboard sampler

        Args:
            paste: Function returning clipboard text. Defaults to the
                platform mechanism pyperclip detects in open().
        """
        self._paste = paste

    def open(self) -> None:
        """
        Select the platform clipboard mechanism

        Raises:
            ClipboardAccessError: If no copy/paste mechanism is available
        """
        if self._paste is not None:
            return

        try:
            _, paste = pyperclip.determine_clipboard()
        except Exception as e:
            raise ClipboardAccessError("Could not set up clipboard") from e

        # pyperclip hands back a falsy placeholder when nothing is usable
        if not paste:
            raise ClipboardAccessError(
                "Could not set up clipboard: no copy/paste mechanism found"
            )

        self._paste = paste
        logger.info("Initialized clipboard context")

    def read(self) -> SampleResult:
        """
        Read the clipboard once

        Returns:
            Text result, or EMPTY when the clipboard holds no text

        Raises:
            ClipboardAccessError: If the clipboard backend fails
        """
        if self._paste is None:
            self.open()

        try:
            content = self._paste()
        except Exception as e:
            raise ClipboardAccessError("Error when attempting to get clipboard contents") from e

        # pyperclip reports an empty or non-text clipboard as '' (None on some backends)
        if not content:
            logger.debug("Clipboard is empty or holds non-text content")
            return EMPTY

        return SampleResult(SampleOutcome.TEXT, content)
