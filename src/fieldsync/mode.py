"""Connectivity mode: the process-wide flag every routing decision reads."""

from __future__ import annotations

import enum
import logging
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


class ConnectivityMode(str, enum.Enum):
    ONLINE = "online"
    OFFLINE = "offline"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str | None) -> "ConnectivityMode":
        """Parse a config/CLI string; anything unrecognised is UNKNOWN."""
        if not value:
            return cls.UNKNOWN
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.UNKNOWN

    @classmethod
    def from_user_status(cls, status: int | None) -> "ConnectivityMode":
        """Map the legacy integer preference (0 online, 1 offline)."""
        if status == 0:
            return cls.ONLINE
        if status == 1:
            return cls.OFFLINE
        return cls.UNKNOWN


@runtime_checkable
class ModeProvider(Protocol):
    def current_mode(self) -> ConnectivityMode: ...


class ModeState:
    """Mutable holder for the current mode.

    Written by whatever watches connectivity (or by an explicit user
    toggle); read by routers through ``current_mode()``. Reads are plain
    attribute snapshots and never wait for a transition.
    """

    def __init__(self, mode: ConnectivityMode = ConnectivityMode.UNKNOWN):
        self._mode = mode

    @classmethod
    def from_settings(cls) -> "ModeState":
        from .config import settings

        return cls(ConnectivityMode.parse(settings.mode))

    def current_mode(self) -> ConnectivityMode:
        return self._mode

    def set_mode(self, mode: ConnectivityMode) -> None:
        if mode is not self._mode:
            logger.info("Connectivity mode %s -> %s", self._mode.value, mode.value)
        self._mode = mode

    @property
    def is_online(self) -> bool:
        return self._mode is ConnectivityMode.ONLINE

    @property
    def is_offline(self) -> bool:
        return self._mode is ConnectivityMode.OFFLINE
