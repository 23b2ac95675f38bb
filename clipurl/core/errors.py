"""Error types raised by clipurl components"""


class ClipUrlError(Exception):
    """Base class for all clipurl errors"""


class ClipboardAccessError(ClipUrlError):
    """The clipboard could not be read"""


class StorageInitError(ClipUrlError):
    """The storage target could not be opened or initialized"""


class PersistError(ClipUrlError):
    """A link could not be written to storage"""


class ConfigError(ClipUrlError):
    """Invalid configuration"""


class UrlParseError(ClipUrlError, ValueError):
    """Text is not a well-formed URL"""
