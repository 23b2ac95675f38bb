"""Storage backend interface for recorded links"""

from abc import ABC, abstractmethod
from typing import Optional

from ..links.url import CandidateURL


class LinkSink(ABC):
    """A destination for links found on the clipboard"""

    @abstractmethod
    def persist(self, url: CandidateURL) -> Optional[int]:
        """
        Store a link

        Args:
            url: Parsed link to store

        Returns:
            Generated record id, or None if the backend has no identifiers
        """

    @abstractmethod
    def describe(self) -> str:
        """Human readable name of the storage target"""

    def close(self) -> None:
        """Release the storage handle"""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
