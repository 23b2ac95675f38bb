"""clipurl application: poll the clipboard and record copied links"""

import argparse
import os
import signal
import sys
from typing import List, Optional
from loguru import logger

from . import __version__
from .core.clipboard import ClipboardSampler
from .core.errors import ClipUrlError, ConfigError
from .core.pipeline import LinkPipeline
from .core.storage import DatabaseSink, LinkSink, create_sink
from .services import PollLoop
from .utils import ConfigManager

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clipurl",
        description="Record URLs copied to the clipboard"
    )

    target = parser.add_mutually_exclusive_group()
    target.add_argument(
        "-l", "--links-db-file",
        help="SQLite database to record links in"
    )
    target.add_argument(
        "-f", "--log-file",
        help="Text file to append links to, one per line"
    )

    parser.add_argument(
        "-p", "--poll-interval-milliseconds",
        type=positive_int,
        default=None,
        help="Time between clipboard samples (default: 5000)"
    )
    parser.add_argument(
        "-c", "--config",
        default=None,
        help="YAML configuration file"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--list",
        type=positive_int,
        metavar="N",
        default=None,
        help="Print the N most recent links from the database and exit"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def format_causal_chain(exc: BaseException) -> str:
    """
    Render an exception and everything that caused it

    Args:
        exc: Outermost exception

    Returns:
        One line per exception, outermost first
    """
    lines = [f"{type(exc).__name__}: {exc}"]
    seen = {id(exc)}

    cause = exc.__cause__ or (None if exc.__suppress_context__ else exc.__context__)
    while cause is not None and id(cause) not in seen:
        seen.add(id(cause))
        lines.append(f"  caused by {type(cause).__name__}: {cause}")
        cause = cause.__cause__ or (None if cause.__suppress_context__ else cause.__context__)

    return "\n".join(lines)


class ClipUrlApp:
    """Main application class"""

    def __init__(self, options: argparse.Namespace):
        """
        Initialize application

        Args:
            options: Parsed command line options
        """
        self.options = options
        self.config_manager: Optional[ConfigManager] = None
        self.sink: Optional[LinkSink] = None
        self.sampler: Optional[ClipboardSampler] = None
        self.poll_loop: Optional[PollLoop] = None
        self._stop_requested = False

    def _setup_logging(self):
        """Configure logging"""
        level = "DEBUG" if self.options.verbose else str(self.config_manager.get('logging.level')).upper()

        logger.remove()  # Remove default handler

        # Console logging
        logger.add(
            sys.stderr,
            level=level,
            format=CONSOLE_FORMAT
        )

        # File logging
        log_path = self.config_manager.get('logging.file')
        if log_path:
            logger.add(
                os.path.expanduser(log_path),
                rotation="1 day",
                retention="7 days",
                level="DEBUG",
                format=FILE_FORMAT
            )

        logger.info("started, logging initialized")

    def _load_config(self):
        """Load configuration and apply command line overrides"""
        self.config_manager = ConfigManager(self.options.config)

        if self.options.links_db_file:
            self.config_manager.set('storage.links_db_file', self.options.links_db_file)
            self.config_manager.set('storage.log_file', None)
        elif self.options.log_file:
            self.config_manager.set('storage.log_file', self.options.log_file)
            self.config_manager.set('storage.links_db_file', None)

        if self.options.poll_interval_milliseconds is not None:
            self.config_manager.set('clipboard.poll_interval_milliseconds',
                                    self.options.poll_interval_milliseconds)

        self.config_manager.validate()

    def initialize(self):
        """
        Load configuration and open the storage target

        Raises:
            ConfigError: If the configuration is invalid
            StorageInitError: If the storage target cannot be initialized
        """
        self._load_config()
        self._setup_logging()

        logger.info(f"got options: {self.config_manager.get_all()}")

        db_file = self.config_manager.get('storage.links_db_file')

        if self.options.list is not None:
            if not db_file:
                raise ConfigError("--list requires a links database")
            self.sink = DatabaseSink(db_file, read_only=True)
            return

        self.sink = create_sink(
            links_db_file=db_file,
            log_file=self.config_manager.get('storage.log_file'),
        )

    def list_links(self, limit: int) -> List[str]:
        """Print the most recent stored links"""
        if not isinstance(self.sink, DatabaseSink):
            raise ConfigError("--list requires a links database")

        links = self.sink.recent(limit)
        for link in links:
            print(link)

        return links

    def run(self):
        """
        Poll the clipboard until interrupted

        Raises:
            ClipboardAccessError: If the clipboard cannot be read
            PersistError: If a link cannot be stored
        """
        self.sampler = ClipboardSampler()
        self.sampler.open()

        self.poll_loop = PollLoop(
            self.sampler,
            LinkPipeline(self.sink),
            self.config_manager.get('clipboard.poll_interval_milliseconds'),
        )

        if self._stop_requested:
            self.poll_loop.stop()

        self.poll_loop.run()

    def request_stop(self):
        """Ask the poll loop to finish after the current tick"""
        self._stop_requested = True
        if self.poll_loop:
            self.poll_loop.stop()

    def shutdown(self):
        """Release the storage target"""
        if self.sink:
            self.sink.close()
            self.sink = None

        logger.info("Shutdown complete")


def signal_handler(signum, frame):
    """Handle system signals; must not log, loguru is not reentrant"""
    if hasattr(signal_handler, 'app'):
        signal_handler.app.request_stop()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    options = build_parser().parse_args(argv)

    app = ClipUrlApp(options)

    # Store app reference for signal handler
    signal_handler.app = app

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        app.initialize()

        if options.list is not None:
            app.list_links(options.list)
        else:
            app.run()

    except ClipUrlError as e:
        logger.error(format_causal_chain(e))
        return 1

    finally:
        app.shutdown()

    return 0
