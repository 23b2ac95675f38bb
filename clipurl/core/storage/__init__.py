"""Link persistence backends"""

from pathlib import Path
from typing import Optional, Union
from loguru import logger

from .base import LinkSink
from .database import DatabaseSink
from .log_file import LogFileSink
from ..errors import ConfigError

__all__ = ['LinkSink', 'DatabaseSink', 'LogFileSink', 'create_sink']


def create_sink(links_db_file: Optional[Union[str, Path]] = None,
                log_file: Optional[Union[str, Path]] = None) -> LinkSink:
    """
    Open the single configured storage target

    Args:
        links_db_file: SQLite database path
        log_file: Append-only text log path

    Returns:
        The opened sink

    Raises:
        ConfigError: If not exactly one target is given
        StorageInitError: If the target cannot be opened
    """
    if bool(links_db_file) == bool(log_file):
        raise ConfigError("Exactly one of links_db_file and log_file must be set")

    if links_db_file:
        logger.debug(f"Using database sink: {links_db_file}")
        return DatabaseSink(links_db_file)

    logger.debug(f"Using log file sink: {log_file}")
    return LogFileSink(log_file)
