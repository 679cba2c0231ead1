"""Local cache models - re-exports all models and Base.metadata."""

from .base import Base, TimestampMixin
from .cache import CachedEntity, CachedDocument
from .pending import PendingWrite

__all__ = [
    "Base",
    "TimestampMixin",
    "CachedEntity",
    "CachedDocument",
    "PendingWrite",
]
