"""Typed results returned by routers, the gateway wrappers and the store."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Page(BaseModel):
    """A page of entities plus the remote's total count.

    An empty page is a normal "no data" answer, not an error.
    """

    model_config = ConfigDict(populate_by_name=True)

    total_filtered_records: int = Field(0, alias="totalFilteredRecords")
    page_items: list[dict[str, Any]] = Field(default_factory=list, alias="pageItems")

    @classmethod
    def from_api(cls, data: Any) -> "Page":
        """Build from either the paged dict shape or a bare list."""
        if isinstance(data, list):
            return cls(total_filtered_records=len(data), page_items=data)
        if isinstance(data, dict):
            return cls.model_validate(data)
        return cls()

    @classmethod
    def of(cls, items: list[dict[str, Any]]) -> "Page":
        return cls(total_filtered_records=len(items), page_items=list(items))

    @property
    def is_empty(self) -> bool:
        return not self.page_items


class SaveResult(BaseModel):
    """Result of a creation.

    A remote creation fills the ids the server assigned. An offline
    creation only carries ``pending_id`` and ``synced=False``; the entity
    does not exist remotely yet.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    resource_id: int | None = Field(None, alias="resourceId")
    office_id: int | None = Field(None, alias="officeId")
    client_id: int | None = Field(None, alias="clientId")
    group_id: int | None = Field(None, alias="groupId")
    pending_id: int | None = None
    synced: bool = True

    @classmethod
    def pending(cls, local_id: int) -> "SaveResult":
        return cls(pending_id=local_id, synced=False)

    @classmethod
    def empty(cls) -> "SaveResult":
        return cls(synced=False)

    @property
    def remote_id(self) -> int | None:
        return self.resource_id or self.client_id or self.group_id


class GenericResult(BaseModel):
    """Result of status, delete and other non-creating remote commands."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    resource_id: int | None = Field(None, alias="resourceId")
    changes: dict[str, Any] = Field(default_factory=dict)


class PendingWriteRecord(BaseModel):
    """A creation queued while offline, waiting to be replayed remotely."""

    model_config = ConfigDict(from_attributes=True)

    local_id: int
    entity_type: str
    payload: dict[str, Any]
    created_at: datetime


class SyncReport(BaseModel):
    """Outcome of one coordinator run for one entity type."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    entity_type: str
    synced: list[SaveResult] = Field(default_factory=list)
    synced_ids: list[int] = Field(default_factory=list)
    remaining: list[PendingWriteRecord] = Field(default_factory=list)
    failed: PendingWriteRecord | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error
