"""
Adapters - External implementations of ports

This package contains implementations of the core ports:
- cninfo.py: cninfo registry and paginated announcement listing
- http.py: httpx document transport
- filesystem.py: Per-company download directories
"""
from .cninfo import CninfoAnnouncementClient, CninfoRegistry
from .filesystem import FilesystemStore
from .http import HttpDocumentTransport

__all__ = [
    "CninfoRegistry",
    "CninfoAnnouncementClient",
    "HttpDocumentTransport",
    "FilesystemStore",
]
