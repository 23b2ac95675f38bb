"""Append-only text log of recorded links"""

from pathlib import Path
from typing import Optional, Union
from loguru import logger

from .base import LinkSink
from ..errors import StorageInitError
from ..links.url import CandidateURL


class LogFileSink(LinkSink):
    """Appends each link as one UTF-8 line to a text file"""

    def __init__(self, log_path: Union[str, Path]):
        self.log_path = Path(log_path).expanduser()

        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self.log_path, 'a', encoding='utf-8', newline='\n')
        except OSError as e:
            raise StorageInitError(f"Could not open link log {self.log_path}") from e

        logger.info(f"Opened link log: {self.log_path}")

    def persist(self, url: CandidateURL) -> Optional[int]:
        self._file.write(f"{url}\n")
        self._file.flush()
        return None

    def describe(self) -> str:
        return f"log file {self.log_path}"

    def close(self):
        if not self._file.closed:
            self._file.close()
            logger.info("Link log closed")
