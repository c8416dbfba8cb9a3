"""
Errors raised by the core and its adapters.

Every error is fatal to the run that raised it. Callers at the edge (CLI,
MCP handlers) turn them into an error result.
"""


class DownloaderError(Exception):
    """Base class for all ann-downloader failures"""


class ResolutionError(DownloaderError):
    """No identifier could be resolved from the input tokens"""


class TransportError(DownloaderError):
    """A network request failed or returned an unusable status"""


class DecodeError(DownloaderError):
    """A response body was malformed or had an unexpected shape"""


class FilesystemError(DownloaderError):
    """A directory or file could not be created or written"""
