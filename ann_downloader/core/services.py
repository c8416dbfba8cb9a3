"""
Application Services - Use cases that orchestrate domain logic

These are the entry points to the core. They coordinate between
domain models and ports, but contain no infrastructure concerns.
Companies, pages and documents are processed strictly one at a time,
and the first error ends the run.
"""
import logging
from typing import Optional, Sequence

from .domain import (
    DownloadedFile,
    DownloadReport,
    EntityListing,
    EntityReport,
    FetchedDocument,
    FilterConfig,
    PlannedDocument,
)
from .fetch import FetchManager
from .filters import apply_filters
from .ports import AnnouncementSource, AnnouncementStore, RegistrySource
from .resolver import resolve_identifiers

logger = logging.getLogger(__name__)


def _report_missing(missing_years: list[str]) -> None:
    for year in missing_years:
        logger.warning(f"{year} announcement cannot be found")


class DownloadAnnouncementsService:
    """Use case: Download filtered announcements for a set of companies"""

    def __init__(
        self,
        registry: RegistrySource,
        source: AnnouncementSource,
        store: AnnouncementStore,
        fetch_manager: FetchManager
    ):
        self.registry = registry
        self.source = source
        self.store = store
        self.fetch_manager = fetch_manager

    def execute(
        self,
        tokens: Sequence[str],
        filter_config: FilterConfig,
        category: str,
        skip_if_exists: Optional[bool] = None
    ) -> DownloadReport:
        """
        Resolve tokens, then query, filter and download each company in turn.

        Raises:
            ResolutionError: no token resolved (before any listing request)
            TransportError, DecodeError, FilesystemError: on first failure
        """
        identifiers = resolve_identifiers(tokens, self.registry.records())
        report = DownloadReport(category=category, entities=[])

        for identifier in identifiers:
            directory = self.store.entity_dir(identifier)
            logger.info(f"Querying {category} announcements for {identifier.dir_name}")

            entries = self.source.query(identifier, category)
            filtered = apply_filters(entries, filter_config)
            _report_missing(filtered.missing_years)

            documents = []
            for entry in filtered.entries:
                url = self.source.document_url(entry)
                path = self.store.destination(identifier, entry.title)
                outcome = self.fetch_manager.fetch(url, path, skip_if_exists)
                documents.append(FetchedDocument(entry=entry, url=url, path=path, outcome=outcome))

            report.entities.append(EntityReport(
                identifier=identifier,
                directory=directory,
                documents=documents,
                missing_years=filtered.missing_years,
                total_listed=len(entries)
            ))

        return report


class ListAnnouncementsService:
    """Use case: Show which announcements a download would select"""

    def __init__(
        self,
        registry: RegistrySource,
        source: AnnouncementSource,
        store: AnnouncementStore
    ):
        self.registry = registry
        self.source = source
        self.store = store

    def execute(
        self,
        tokens: Sequence[str],
        filter_config: FilterConfig,
        category: str
    ) -> list[EntityListing]:
        """Same selection as a download, without touching the filesystem"""
        identifiers = resolve_identifiers(tokens, self.registry.records())
        listings = []

        for identifier in identifiers:
            entries = self.source.query(identifier, category)
            filtered = apply_filters(entries, filter_config)
            _report_missing(filtered.missing_years)

            documents = []
            for entry in filtered.entries:
                path = self.store.destination(identifier, entry.title)
                documents.append(PlannedDocument(
                    entry=entry,
                    url=self.source.document_url(entry),
                    path=path,
                    exists=path.exists()
                ))

            listings.append(EntityListing(
                identifier=identifier,
                documents=documents,
                missing_years=filtered.missing_years,
                total_listed=len(entries)
            ))

        return listings


class ListDownloadedService:
    """Use case: List announcements already on disk"""

    def __init__(self, store: AnnouncementStore):
        self.store = store

    def execute(self, stock_code: Optional[str] = None) -> tuple[list[DownloadedFile], int]:
        """
        List downloaded files and disk usage.

        Returns:
            (downloaded_files, disk_usage_bytes)
        """
        files = self.store.list_downloaded(stock_code)
        return files, self.store.disk_usage()
