"""
Ports - Interfaces for external dependencies

These define HOW the core interacts with the outside world,
but NOT the implementation details.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO, Optional

from .domain import DownloadedFile, ListingEntry, RegistryRecord, ResolvedIdentifier


class RegistrySource(ABC):
    """Port for the company registry table"""

    @abstractmethod
    def records(self) -> list[RegistryRecord]:
        """Return every registry record (loaded once per process)"""
        pass


class AnnouncementSource(ABC):
    """Port for the paginated announcement listing"""

    @abstractmethod
    def query(self, identifier: ResolvedIdentifier, category: str) -> list[ListingEntry]:
        """Return every announcement of the category, across all pages"""
        pass

    @abstractmethod
    def document_url(self, entry: ListingEntry) -> str:
        """Absolute URL of the entry's attachment"""
        pass


class DocumentTransport(ABC):
    """Port for streaming a remote document"""

    @abstractmethod
    def download(self, url: str, out: BinaryIO) -> int:
        """Stream the body at url into out, return bytes written"""
        pass


class AnnouncementStore(ABC):
    """Port for the per-company download directory tree"""

    @abstractmethod
    def entity_dir(self, identifier: ResolvedIdentifier, create: bool = True) -> Path:
        """Directory for one company, created on demand"""
        pass

    @abstractmethod
    def destination(self, identifier: ResolvedIdentifier, title: str) -> Path:
        """Destination path of an announcement"""
        pass

    @abstractmethod
    def list_downloaded(self, stock_code: Optional[str] = None) -> list[DownloadedFile]:
        """List downloaded announcements, optionally for one company"""
        pass

    @abstractmethod
    def disk_usage(self) -> int:
        """Total size of downloaded announcements in bytes"""
        pass
