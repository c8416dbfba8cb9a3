"""
Core - Domain logic and ports

This package contains:
- domain.py: Pure domain models
- errors.py: Error taxonomy
- ports.py: Port interfaces (abstractions for external dependencies)
- resolver.py, filters.py, fetch.py: Identifier resolution, listing filters, fetching
- services.py: Application services (use cases)
"""
from .domain import (
    AllYears,
    DownloadedFile,
    DownloadReport,
    EntityListing,
    EntityReport,
    ExplicitYears,
    FetchedDocument,
    FetchOutcome,
    FilterConfig,
    FilterResult,
    ListingEntry,
    PlannedDocument,
    RecentYears,
    RegistryRecord,
    ResolvedIdentifier,
)
from .errors import DecodeError, DownloaderError, FilesystemError, ResolutionError, TransportError
from .fetch import FetchManager
from .filters import apply_filters, extract_year
from .ports import AnnouncementSource, AnnouncementStore, DocumentTransport, RegistrySource
from .resolver import resolve_identifiers
from .services import DownloadAnnouncementsService, ListAnnouncementsService, ListDownloadedService

__all__ = [
    # Domain models
    "RegistryRecord",
    "ResolvedIdentifier",
    "ListingEntry",
    "AllYears",
    "ExplicitYears",
    "RecentYears",
    "FilterConfig",
    "FilterResult",
    "FetchOutcome",
    "FetchedDocument",
    "EntityReport",
    "DownloadReport",
    "PlannedDocument",
    "EntityListing",
    "DownloadedFile",
    # Errors
    "DownloaderError",
    "ResolutionError",
    "TransportError",
    "DecodeError",
    "FilesystemError",
    # Ports
    "RegistrySource",
    "AnnouncementSource",
    "DocumentTransport",
    "AnnouncementStore",
    # Core logic
    "resolve_identifiers",
    "apply_filters",
    "extract_year",
    "FetchManager",
    # Services
    "DownloadAnnouncementsService",
    "ListAnnouncementsService",
    "ListDownloadedService",
]
