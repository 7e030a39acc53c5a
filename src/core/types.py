"""Shared typed models.

This module defines immutable data models used by the transformer,
cache store, lifecycle controller, and CLI layers.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Mapping

LifecycleEvent = Literal["full-run", "incremental-run"]
CycleStatus = Literal["fetched", "skipped"]

RawPlatformRecord = Mapping[str, Any]
RawIntegrationGroup = Mapping[str, RawPlatformRecord]
RawIndex = Mapping[str, RawIntegrationGroup]


@dataclass(frozen=True)
class IntegrationEntry:
    """One normalized integration row.

    Attributes:
        id: ``platform_id`` for the group itself, else ``platform_id-integration_id``.
        name: Display name from the source record.
        type: Integration kind, ``language`` or ``framework``.
        link: Documentation link from the source record.
    """

    id: str
    name: str
    type: str
    link: str

    def to_payload(self) -> dict[str, str]:
        return {"id": self.id, "name": self.name, "type": self.type, "link": self.link}


@dataclass(frozen=True)
class PlatformEntry:
    """One normalized platform with its sorted integrations."""

    id: str
    name: str
    integrations: tuple[IntegrationEntry, ...]

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "integrations": [integration.to_payload() for integration in self.integrations],
        }


@dataclass(frozen=True)
class CacheCycleResult:
    """Outcome of one lifecycle event.

    Attributes:
        event: Lifecycle event that was handled.
        status: ``fetched`` when a cycle ran, ``skipped`` otherwise.
        cache_path: Cache file location.
        platform_count: Number of platforms written, zero when skipped.
        integration_count: Number of integrations written, zero when skipped.
    """

    event: LifecycleEvent
    status: CycleStatus
    cache_path: Path
    platform_count: int = 0
    integration_count: int = 0
