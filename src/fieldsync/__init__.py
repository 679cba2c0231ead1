"""fieldsync - connectivity-aware data access with an offline write queue."""

from .errors import (
    EntityNotCached,
    FieldSyncError,
    PendingRecordNotFound,
    StorageError,
    TransportError,
)
from .layer import DataLayer
from .mode import ConnectivityMode, ModeProvider, ModeState
from .schemas import GenericResult, Page, PendingWriteRecord, SaveResult, SyncReport
from .store import LocalCacheStore
from .sync import SyncCoordinator, SyncInProgress
from .tasks import BackgroundTasks

__all__ = [
    "BackgroundTasks",
    "ConnectivityMode",
    "DataLayer",
    "EntityNotCached",
    "FieldSyncError",
    "GenericResult",
    "LocalCacheStore",
    "ModeProvider",
    "ModeState",
    "Page",
    "PendingRecordNotFound",
    "PendingWriteRecord",
    "SaveResult",
    "StorageError",
    "SyncCoordinator",
    "SyncInProgress",
    "SyncReport",
    "TransportError",
]
