"""
Dependency Injection Container

Wires together the hexagonal architecture by creating and injecting dependencies.
"""
from pathlib import Path
from typing import Optional

import httpx

from . import __version__
from .adapters import CninfoAnnouncementClient, CninfoRegistry, FilesystemStore, HttpDocumentTransport
from .core import (
    DownloadAnnouncementsService,
    FetchManager,
    ListAnnouncementsService,
    ListDownloadedService,
)

USER_AGENT = f"ann-downloader/{__version__}"


class Container:
    """Dependency injection container for the application"""

    def __init__(
        self,
        base_dir: str | Path,
        skip_if_exists: bool = True,
        client: Optional[httpx.Client] = None
    ):
        # Shared HTTP client (injectable for tests)
        self.client = client or httpx.Client(headers={"User-Agent": USER_AGENT})

        # Adapters (infrastructure)
        self.registry = CninfoRegistry(self.client)
        self.source = CninfoAnnouncementClient(self.client)
        self.transport = HttpDocumentTransport(self.client)
        self.store = FilesystemStore(base_dir)
        self.fetch_manager = FetchManager(self.transport, skip_if_exists=skip_if_exists)

        # Services (use cases)
        self.download = DownloadAnnouncementsService(
            registry=self.registry,
            source=self.source,
            store=self.store,
            fetch_manager=self.fetch_manager
        )

        self.list_announcements = ListAnnouncementsService(
            registry=self.registry,
            source=self.source,
            store=self.store
        )

        self.list_downloaded = ListDownloadedService(
            store=self.store
        )

    def close(self) -> None:
        self.client.close()
