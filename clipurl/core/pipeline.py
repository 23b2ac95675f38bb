"""Change detection and persistence of clipboard links"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple
from loguru import logger

from .links.url import CandidateURL, parse_url
from .errors import PersistError
from .storage.base import LinkSink


class PersistStatus(Enum):
    """Result of one pipeline pass"""
    SKIPPED_UNCHANGED = "skipped_unchanged"
    SKIPPED_NOT_A_URL = "skipped_not_a_url"
    PERSISTED = "persisted"


@dataclass(frozen=True)
class PersistOutcome:
    status: PersistStatus
    url: Optional[CandidateURL] = None
    record_id: Optional[int] = None

    @property
    def persisted(self) -> bool:
        return self.status is PersistStatus.PERSISTED


class LinkPipeline:
    """Compares clipboard text with the last snapshot and stores new links"""

    def __init__(self, sink: LinkSink):
        """
        Initialize pipeline

        Args:
            sink: Storage backend that receives parsed links
        """
        self.sink = sink

    def process(self, new_text: str, previous_snapshot: str) -> Tuple[str, PersistOutcome]:
        """
        Process one clipboard reading

        The new text becomes the snapshot whenever it differs from the
        previous one, whether or not it parses as a URL.

        Args:
            new_text: Text just read from the clipboard
            previous_snapshot: Last text accepted as new

        Returns:
            Tuple of (updated_snapshot, outcome)

        Raises:
            PersistError: If the sink fails to store a parsed link
        """
        if new_text == previous_snapshot:
            return previous_snapshot, PersistOutcome(PersistStatus.SKIPPED_UNCHANGED)

        snapshot = new_text

        url = parse_url(new_text)
        if url is None:
            logger.debug(f"Clipboard text is not a URL ({len(new_text)} characters)")
            return snapshot, PersistOutcome(PersistStatus.SKIPPED_NOT_A_URL)

        try:
            record_id = self.sink.persist(url)
        except Exception as e:
            raise PersistError(f"Could not write link to {self.sink.describe()}") from e

        logger.info(f"Recorded link: {url}")
        return snapshot, PersistOutcome(PersistStatus.PERSISTED, url=url, record_id=record_id)
