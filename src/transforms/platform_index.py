"""Platform index normalization transform.

This module flattens the nested remote platform index into sorted
platform entries and renders the cache document consumed downstream.
It is pure: identical input always yields byte-identical output.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, Mapping

from core.constants import ENVELOPE_KEY, INTEGRATION_ID_SEPARATOR, SELF_KEY
from core.errors import DocsCacheIndexError
from core.types import IntegrationEntry, PlatformEntry, RawIndex, RawIntegrationGroup
from transforms.collation import sort_by_name

_REQUIRED_RECORD_FIELDS = ("name", "type", "doc_link")


def normalize_platforms(raw_index: RawIndex) -> tuple[PlatformEntry, ...]:
    """Normalize a raw platform index into sorted platform entries.

    Every integration key is kept, including ``_self``, which sorts by
    name alongside the other integrations of its platform.

    Args:
        raw_index: Mapping of platform id to integration group.

    Returns:
        Platform entries sorted by name.

    Raises:
        DocsCacheIndexError: If a group lacks ``_self`` or a record lacks
            a required field.
    """
    platforms = [
        _build_platform_entry(platform_id, _expect_group(platform_id, group))
        for platform_id, group in raw_index.items()
    ]
    return tuple(sort_by_name(platforms, lambda platform: platform.name))


def integration_id(platform_id: str, integration_key: str) -> str:
    """Build the document id for one integration key."""
    if integration_key == SELF_KEY:
        return platform_id
    return f"{platform_id}{INTEGRATION_ID_SEPARATOR}{integration_key}"


def build_cache_payload(platforms: Iterable[PlatformEntry]) -> dict[str, Any]:
    """Wrap normalized platforms in the cache document envelope."""
    return {ENVELOPE_KEY: [platform.to_payload() for platform in platforms]}


def serialize_cache_document(platforms: Iterable[PlatformEntry]) -> str:
    """Render the cache document as compact JSON text.

    Args:
        platforms: Normalized platform entries in document order.

    Returns:
        JSON text without insignificant whitespace.
    """
    return json.dumps(
        build_cache_payload(platforms),
        ensure_ascii=False,
        separators=(",", ":"),
    )


def _build_platform_entry(platform_id: str, group: RawIntegrationGroup) -> PlatformEntry:
    if SELF_KEY not in group:
        raise DocsCacheIndexError(
            f"Platform '{platform_id}' in remote index has no '{SELF_KEY}' record. "
            "Check the index endpoint returns a complete platform document."
        )
    records = {
        key: _expect_record(platform_id, key, record) for key, record in group.items()
    }
    ordered_keys = sort_by_name(records, lambda key: str(records[key]["name"]))
    integrations = tuple(
        IntegrationEntry(
            id=integration_id(platform_id, key),
            name=str(records[key]["name"]),
            type=str(records[key]["type"]),
            link=str(records[key]["doc_link"]),
        )
        for key in ordered_keys
    )
    return PlatformEntry(
        id=platform_id,
        name=str(records[SELF_KEY]["name"]),
        integrations=integrations,
    )


def _expect_group(platform_id: str, group: object) -> RawIntegrationGroup:
    if isinstance(group, Mapping):
        return group
    raise DocsCacheIndexError(
        f"Invalid remote index: platform '{platform_id}' expected object mapping, "
        f"got {type(group).__name__}."
    )


def _expect_record(platform_id: str, key: str, record: object) -> Mapping[str, Any]:
    if not isinstance(record, Mapping):
        raise DocsCacheIndexError(
            f"Invalid remote index: record '{platform_id}.{key}' expected object mapping, "
            f"got {type(record).__name__}."
        )
    missing_fields = [field for field in _REQUIRED_RECORD_FIELDS if field not in record]
    if missing_fields:
        raise DocsCacheIndexError(
            f"Invalid remote index: record '{platform_id}.{key}' is missing "
            f"{', '.join(missing_fields)}."
        )
    return record
