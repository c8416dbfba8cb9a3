"""
Listing filters

Pure functions, applied in the order match -> not-match -> year.
None of them raise; the worst case is an empty list.
"""
import re
from typing import Optional, Sequence

from .domain import (
    AllYears,
    ExplicitYears,
    FilterConfig,
    FilterResult,
    ListingEntry,
    RecentYears,
    YearSelector,
)

YEAR_PATTERN = re.compile(r"20\d\d")


def filter_match_keywords(
    entries: Sequence[ListingEntry],
    keywords: Optional[Sequence[str]]
) -> list[ListingEntry]:
    """Keep entries whose title contains at least one keyword.

    None disables the filter; an empty sequence keeps nothing.
    """
    if keywords is None:
        return list(entries)
    return [e for e in entries if any(k in e.title for k in keywords)]


def filter_not_match_keywords(
    entries: Sequence[ListingEntry],
    keywords: Optional[Sequence[str]]
) -> list[ListingEntry]:
    """Drop entries whose title contains any keyword"""
    if not keywords:
        return list(entries)
    return [e for e in entries if not any(k in e.title for k in keywords)]


def extract_year(title: str) -> Optional[str]:
    """Leftmost 20xx in the title.

    Titles like "2022年年度报告（2021年修订）" give the first year found,
    which is not always the fiscal year.
    """
    match = YEAR_PATTERN.search(title)
    return match.group(0) if match else None


def select_years(entries: Sequence[ListingEntry], selector: YearSelector) -> FilterResult:
    """Group entries by title year and keep the selected years.

    Output is ordered by selected year (configured order for ExplicitYears,
    most recent first for RecentYears), then by listing order.
    """
    if isinstance(selector, AllYears):
        return FilterResult(entries=list(entries))

    by_year: dict[str, list[ListingEntry]] = {}
    for entry in entries:
        year = extract_year(entry.title)
        if year is None:
            continue
        by_year.setdefault(year, []).append(entry)

    if isinstance(selector, ExplicitYears):
        years = list(dict.fromkeys(selector.years))
    elif isinstance(selector, RecentYears):
        # Most recent years actually present, not calendar-relative
        observed = sorted(by_year)
        years = list(reversed(observed[-selector.count:])) if selector.count > 0 else []
    else:
        raise TypeError(f"Unknown year selector: {selector!r}")

    result = FilterResult(entries=[])
    for year in years:
        if year not in by_year:
            result.missing_years.append(year)
            continue
        result.entries.extend(by_year[year])

    return result


def apply_filters(entries: Sequence[ListingEntry], config: FilterConfig) -> FilterResult:
    """Run the full filter chain"""
    kept = filter_match_keywords(entries, config.match_keywords)
    kept = filter_not_match_keywords(kept, config.not_match_keywords)
    return select_years(kept, config.year_selector)
