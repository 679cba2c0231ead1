"""Error taxonomy shared by the gateway, the local store and the routers."""

from __future__ import annotations


class FieldSyncError(Exception):
    """Base class for every error raised by fieldsync."""


class TransportError(FieldSyncError):
    """A remote call failed (network, HTTP status or response decoding).

    Routers never retry or wrap these; they reach the caller as raised by
    the gateway. The original ``httpx`` exception is kept as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        *,
        endpoint: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.endpoint = endpoint
        self.status_code = status_code


class StorageError(FieldSyncError):
    """A local cache read or write failed."""


class PendingRecordNotFound(StorageError):
    """No pending write record exists for the given local id."""

    def __init__(self, local_id: int, entity_type: str | None = None):
        where = f" for {entity_type}" if entity_type else ""
        super().__init__(f"Pending record {local_id} not found{where}")
        self.local_id = local_id
        self.entity_type = entity_type


class EntityNotCached(StorageError):
    """An offline read asked for an entity or document never mirrored locally."""

    def __init__(self, entity_type: str, key: int | str):
        super().__init__(f"No cached {entity_type} for {key!r}")
        self.entity_type = entity_type
        self.key = key
