"""
Identifier resolution

Maps user tokens (stock code, pinyin abbreviation or short name) onto
registry records.
"""
from typing import Iterable

from .domain import RegistryRecord, ResolvedIdentifier
from .errors import ResolutionError


def matches(record: RegistryRecord, token: str) -> bool:
    """Exact match against code, pinyin or short name"""
    return token in (record.code, record.pinyin, record.short_name)


def resolve_identifiers(
    tokens: Iterable[str],
    records: Iterable[RegistryRecord]
) -> list[ResolvedIdentifier]:
    """
    Resolve tokens against the registry.

    Every (record, token) match yields its own identifier, so duplicate
    registry rows and tokens naming the same company are all kept.

    Raises:
        ResolutionError: if nothing matched
    """
    tokens = [t for t in tokens if t]
    resolved = []

    for record in records:
        if not record.is_complete():
            continue
        for token in tokens:
            if matches(record, token):
                resolved.append(ResolvedIdentifier(
                    stock_code=record.code,
                    org_id=record.org_id,
                    display_name=record.short_name.replace("*", ""),
                ))

    if not resolved:
        raise ResolutionError(f"lookup symbol(s) failed: {', '.join(tokens) or '(none)'}")

    return resolved
