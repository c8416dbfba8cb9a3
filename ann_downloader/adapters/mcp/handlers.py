"""
MCP Tool Handlers

Shared handlers for MCP tools and the CLI that use the hexagonal core.
"""
import asyncio
from typing import Any, Optional, Sequence

from ...config import DEFAULT_EXCLUDE_KEYWORDS, get_default_category
from ...container import Container
from ...core.domain import AllYears, ExplicitYears, FilterConfig, RecentYears, RECENT_YEARS
from ...adapters.cninfo import resolve_category


def build_filter_config(
    years: Optional[Sequence[str]] = None,
    recent_years: Optional[int] = None,
    all_years: bool = False,
    match: Optional[Sequence[str]] = None,
    exclude: Optional[Sequence[str]] = None
) -> FilterConfig:
    """Translate tool/CLI arguments into a FilterConfig.

    exclude=None means the default exclusions; pass [] to exclude nothing.
    years=[] is an explicit empty year set and selects nothing.
    """
    if years is not None:
        selector = ExplicitYears(tuple(years))
    elif all_years:
        selector = AllYears()
    else:
        selector = RecentYears(RECENT_YEARS if recent_years is None else recent_years)

    return FilterConfig(
        match_keywords=None if match is None else tuple(match),
        not_match_keywords=DEFAULT_EXCLUDE_KEYWORDS if exclude is None else tuple(exclude),
        year_selector=selector
    )


class MCPHandlers:
    """Handlers for MCP tools using dependency injection"""

    def __init__(self, container: Container):
        self.container = container
        # Services share one client and one download dir; run them one at a time
        self._lock = asyncio.Lock()

    async def _run(self, func, **kwargs):
        async with self._lock:
            return await asyncio.to_thread(func, **kwargs)

    async def download_announcements(
        self,
        symbols: Sequence[str],
        years: Optional[Sequence[str]] = None,
        recent_years: Optional[int] = None,
        all_years: bool = False,
        match: Optional[Sequence[str]] = None,
        exclude: Optional[Sequence[str]] = None,
        category: Optional[str] = None,
        no_skip: bool = False
    ) -> dict[str, Any]:
        """Download selected announcements and report what happened"""
        try:
            config = build_filter_config(years, recent_years, all_years, match, exclude)
            selector = resolve_category(category or get_default_category())

            report = await self._run(
                self.container.download.execute,
                tokens=list(symbols),
                filter_config=config,
                category=selector,
                skip_if_exists=False if no_skip else None
            )

            companies = []
            for entity in report.entities:
                companies.append({
                    "code": entity.identifier.stock_code,
                    "org_id": entity.identifier.org_id,
                    "name": entity.identifier.display_name,
                    "directory": str(entity.directory),
                    "total_listed": entity.total_listed,
                    "missing_years": entity.missing_years,
                    "documents": [
                        {
                            "title": d.entry.title,
                            "url": d.url,
                            "path": str(d.path),
                            "status": d.outcome.value
                        }
                        for d in entity.documents
                    ]
                })

            return {
                "success": True,
                "category": report.category,
                "downloaded": report.downloaded,
                "skipped": report.skipped,
                "companies": companies
            }

        except Exception as e:
            return {
                "success": False,
                "error": f"Failed to download announcements: {str(e)}"
            }

    async def list_announcements(
        self,
        symbols: Sequence[str],
        years: Optional[Sequence[str]] = None,
        recent_years: Optional[int] = None,
        all_years: bool = False,
        match: Optional[Sequence[str]] = None,
        exclude: Optional[Sequence[str]] = None,
        category: Optional[str] = None
    ) -> dict[str, Any]:
        """List the announcements a download would select"""
        try:
            config = build_filter_config(years, recent_years, all_years, match, exclude)
            selector = resolve_category(category or get_default_category())

            listings = await self._run(
                self.container.list_announcements.execute,
                tokens=list(symbols),
                filter_config=config,
                category=selector
            )

            companies = []
            for listing in listings:
                companies.append({
                    "code": listing.identifier.stock_code,
                    "org_id": listing.identifier.org_id,
                    "name": listing.identifier.display_name,
                    "total_listed": listing.total_listed,
                    "missing_years": listing.missing_years,
                    "documents": [
                        {
                            "title": d.entry.title,
                            "url": d.url,
                            "path": str(d.path),
                            "downloaded": d.exists
                        }
                        for d in listing.documents
                    ]
                })

            return {
                "success": True,
                "category": selector,
                "companies": companies
            }

        except Exception as e:
            return {
                "success": False,
                "error": f"Failed to list announcements: {str(e)}"
            }

    async def list_downloaded(self, code: Optional[str] = None) -> dict[str, Any]:
        """List announcement PDFs already on disk"""
        try:
            files, disk_usage = await self._run(
                self.container.list_downloaded.execute,
                stock_code=code
            )

            return {
                "success": True,
                "files": [
                    {
                        "code": f.stock_code,
                        "name": f.display_name,
                        "title": f.title,
                        "path": str(f.path),
                        "size_bytes": f.size_bytes
                    }
                    for f in files
                ],
                "count": len(files),
                "disk_usage_mb": round(disk_usage / 1024 / 1024, 2)
            }

        except Exception as e:
            return {
                "success": False,
                "error": f"Failed to list downloaded announcements: {str(e)}"
            }
