"""
Fetch manager

Turns a selected announcement into a file on disk. Presence of the
destination file counts as a finished download when skipping is enabled.
"""
import logging
from pathlib import Path

from .domain import FetchOutcome
from .errors import FilesystemError
from .ports import DocumentTransport

logger = logging.getLogger(__name__)


class FetchManager:
    """Downloads one document at a time through a DocumentTransport"""

    def __init__(self, transport: DocumentTransport, skip_if_exists: bool = True):
        self.transport = transport
        self.skip_if_exists = skip_if_exists

    def fetch(self, url: str, destination: Path, skip_if_exists: bool | None = None) -> FetchOutcome:
        """
        Download url into destination.

        A failed transfer leaves whatever was written so far on disk.

        Raises:
            TransportError: the request failed
            FilesystemError: the destination could not be written
        """
        skip = self.skip_if_exists if skip_if_exists is None else skip_if_exists

        if skip and destination.exists():
            logger.info(f"{destination} already exists, skip downloading")
            return FetchOutcome.SKIPPED

        try:
            out = destination.open("wb")
        except OSError as e:
            raise FilesystemError(f"Cannot create {destination}: {e}") from e

        with out:
            try:
                written = self.transport.download(url, out)
            except OSError as e:
                raise FilesystemError(f"Cannot write {destination}: {e}") from e

        logger.info(f"Downloaded {destination} ({written} bytes)")
        return FetchOutcome.DOWNLOADED
