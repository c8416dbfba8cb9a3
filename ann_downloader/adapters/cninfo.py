"""
cninfo Adapter

Implements RegistrySource and AnnouncementSource against cninfo.com.cn
using httpx.
"""
import logging
from typing import Any, Optional

import httpx

from ..core.domain import ListingEntry, RegistryRecord, ResolvedIdentifier
from ..core.errors import DecodeError, TransportError
from ..core.ports import AnnouncementSource, RegistrySource

logger = logging.getLogger(__name__)

REGISTRY_URL = "http://www.cninfo.com.cn/new/data/szse_stock.json"
QUERY_URL = "http://www.cninfo.com.cn/new/hisAnnouncement/query"
STATIC_BASE_URL = "http://static.cninfo.com.cn/"

PAGE_SIZE = 30

DEFAULT_CATEGORY = "category_ndbg_szsh"

# Friendly names for common cninfo category selectors
CATEGORY_ALIASES = {
    "annual": "category_ndbg_szsh",
    "semiannual": "category_bndbg_szsh",
    "q1": "category_yjdbg_szsh",
    "q3": "category_sjdbg_szsh",
}


def resolve_category(category: Optional[str]) -> str:
    """Map an alias to its cninfo selector; anything else passes through"""
    if not category:
        return DEFAULT_CATEGORY
    return CATEGORY_ALIASES.get(category, category)


def _decode_json(response: httpx.Response, what: str) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise DecodeError(f"Invalid JSON in {what} response: {e}") from e


class CninfoRegistry(RegistrySource):
    """Stock registry loaded once from szse_stock.json"""

    def __init__(self, client: httpx.Client, url: str = REGISTRY_URL):
        self.client = client
        self.url = url
        # Lazy-loaded on first use
        self._records: Optional[list[RegistryRecord]] = None

    def records(self) -> list[RegistryRecord]:
        if self._records is None:
            self._records = self._load()
        return self._records

    def _load(self) -> list[RegistryRecord]:
        logger.info(f"Loading stock registry from {self.url}")
        try:
            response = self.client.get(self.url)
        except httpx.HTTPError as e:
            raise TransportError(f"Registry request failed: {e}") from e

        if response.status_code != 200:
            raise TransportError(f"Registry request returned HTTP {response.status_code}")

        body = _decode_json(response, "registry")
        stock_list = body.get("stockList") if isinstance(body, dict) else None
        if not isinstance(stock_list, list):
            raise DecodeError("Registry response has no stockList array")

        records = []
        for row in stock_list:
            if not isinstance(row, dict):
                raise DecodeError(f"Unexpected registry row: {row!r}")
            records.append(RegistryRecord.from_json(row))

        logger.info(f"Loaded {len(records)} registry records")
        return records


class CninfoAnnouncementClient(AnnouncementSource):
    """Paginated announcement listing (hisAnnouncement/query)"""

    def __init__(
        self,
        client: httpx.Client,
        query_url: str = QUERY_URL,
        static_base_url: str = STATIC_BASE_URL
    ):
        self.client = client
        self.query_url = query_url
        self.static_base_url = static_base_url

    def _form(self, identifier: ResolvedIdentifier, category: str, page: int) -> dict[str, str]:
        return {
            "pageNum": str(page),
            "pageSize": str(PAGE_SIZE),
            "column": "",
            "tabName": "fulltext",
            "plate": "",
            "stock": f"{identifier.stock_code},{identifier.org_id}",
            "searchkey": "",
            "secid": "",
            "category": category,
            "trade": "",
            "seDate": "",
            "sortName": "",
            "sortType": "",
            "isHLtitle": "true",
        }

    def fetch_page(
        self,
        identifier: ResolvedIdentifier,
        category: str,
        page: int
    ) -> tuple[list[ListingEntry], bool]:
        """Fetch one page, return (entries, has_more)"""
        try:
            response = self.client.post(self.query_url, data=self._form(identifier, category, page))
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise TransportError(
                f"Announcement query failed for {identifier.stock_code} page {page}: {e}"
            ) from e

        body = _decode_json(response, "announcement query")
        if not isinstance(body, dict):
            raise DecodeError(f"Unexpected announcement query response: {body!r}")

        has_more = body.get("hasMore")
        if not isinstance(has_more, bool):
            raise DecodeError(f"Announcement query response has no boolean hasMore: {has_more!r}")

        # Empty pages come back with announcements missing or null
        raw_entries = body.get("announcements") or []
        if not isinstance(raw_entries, list):
            raise DecodeError(f"Unexpected announcements field: {raw_entries!r}")

        entries = []
        for raw in raw_entries:
            title = raw.get("announcementTitle") if isinstance(raw, dict) else None
            adjunct_url = raw.get("adjunctUrl") if isinstance(raw, dict) else None
            if not isinstance(title, str) or not isinstance(adjunct_url, str):
                raise DecodeError(f"Malformed announcement: {raw!r}")
            entries.append(ListingEntry(title=title, adjunct_url=adjunct_url))

        return entries, has_more

    def query(self, identifier: ResolvedIdentifier, category: str) -> list[ListingEntry]:
        """Accumulate every page until the service reports hasMore=false"""
        results: list[ListingEntry] = []
        page = 1

        while True:
            entries, has_more = self.fetch_page(identifier, category, page)
            logger.debug(f"{identifier.stock_code} page {page}: {len(entries)} announcements")
            results.extend(entries)
            if not has_more:
                break
            page += 1

        return results

    def document_url(self, entry: ListingEntry) -> str:
        return self.static_base_url + entry.adjunct_url
