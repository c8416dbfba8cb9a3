"""
Domain Models - Pure business entities

No external dependencies. These represent the core business concepts.
"""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Union

# Years kept by the default year selector
RECENT_YEARS = 3


@dataclass(frozen=True)
class RegistryRecord:
    """One row of the cninfo stock registry"""
    code: str
    org_id: str
    pinyin: str
    short_name: str  # zwjc, may carry '*' watch-list markers (e.g. *ST)

    @classmethod
    def from_json(cls, row: dict) -> "RegistryRecord":
        return cls(
            code=row.get("code") or "",
            org_id=row.get("orgId") or "",
            pinyin=row.get("pinyin") or "",
            short_name=row.get("zwjc") or "",
        )

    def is_complete(self) -> bool:
        """True when code, orgId and short name are all present"""
        return bool(self.code and self.org_id and self.short_name)


@dataclass(frozen=True)
class ResolvedIdentifier:
    """Canonical company identifier used to query announcements"""
    stock_code: str
    org_id: str
    display_name: str  # short name with '*' removed

    @property
    def dir_name(self) -> str:
        return f"{self.stock_code}.{self.display_name}"


@dataclass(frozen=True)
class ListingEntry:
    """An announcement returned by the listing service"""
    title: str
    adjunct_url: str  # relative path of the PDF attachment


@dataclass(frozen=True)
class AllYears:
    """No year post-filter"""


@dataclass(frozen=True)
class ExplicitYears:
    """Keep only the given years, in the given order"""
    years: tuple[str, ...]


@dataclass(frozen=True)
class RecentYears:
    """Keep the N most recent years observed in the titles"""
    count: int = RECENT_YEARS


YearSelector = Union[AllYears, ExplicitYears, RecentYears]


@dataclass(frozen=True)
class FilterConfig:
    """Keyword and year rules applied to a listing.

    match_keywords=None passes everything, while an empty tuple rejects
    everything.
    """
    match_keywords: Optional[tuple[str, ...]] = None
    not_match_keywords: Optional[tuple[str, ...]] = None
    year_selector: YearSelector = field(default_factory=RecentYears)


@dataclass
class FilterResult:
    """Entries that survived filtering plus requested years with no match"""
    entries: list[ListingEntry]
    missing_years: list[str] = field(default_factory=list)


class FetchOutcome(str, Enum):
    DOWNLOADED = "downloaded"
    SKIPPED = "skipped"


@dataclass
class FetchedDocument:
    """One selected announcement and what happened to it"""
    entry: ListingEntry
    url: str
    path: Path
    outcome: FetchOutcome


@dataclass
class EntityReport:
    """Download results for one resolved identifier"""
    identifier: ResolvedIdentifier
    directory: Path
    documents: list[FetchedDocument]
    missing_years: list[str]
    total_listed: int


@dataclass
class DownloadReport:
    """Results for a whole run"""
    category: str
    entities: list[EntityReport]

    @property
    def downloaded(self) -> int:
        return sum(
            1 for e in self.entities for d in e.documents
            if d.outcome is FetchOutcome.DOWNLOADED
        )

    @property
    def skipped(self) -> int:
        return sum(
            1 for e in self.entities for d in e.documents
            if d.outcome is FetchOutcome.SKIPPED
        )


@dataclass
class PlannedDocument:
    """A selected announcement that has not been fetched"""
    entry: ListingEntry
    url: str
    path: Path
    exists: bool


@dataclass
class EntityListing:
    """Filtered listing for one resolved identifier"""
    identifier: ResolvedIdentifier
    documents: list[PlannedDocument]
    missing_years: list[str]
    total_listed: int


@dataclass
class DownloadedFile:
    """An announcement PDF already on disk"""
    stock_code: str
    display_name: str
    title: str
    path: Path
    size_bytes: int
