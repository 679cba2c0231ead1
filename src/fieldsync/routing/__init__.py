"""Connectivity-aware routers, one per entity type."""

from .base import EntityRouter, QueueingRouter, ReadOp
from .clients import ClientRouter
from .centers import CenterRouter
from .offices import OfficeRouter
from .surveys import SurveyRouter

ROUTERS: dict[str, type[EntityRouter]] = {
    ClientRouter.entity_type: ClientRouter,
    CenterRouter.entity_type: CenterRouter,
    OfficeRouter.entity_type: OfficeRouter,
    SurveyRouter.entity_type: SurveyRouter,
}

QUEUEING_ENTITY_TYPES = tuple(
    name for name, cls in ROUTERS.items() if issubclass(cls, QueueingRouter)
)

__all__ = [
    "EntityRouter",
    "QueueingRouter",
    "ReadOp",
    "ClientRouter",
    "CenterRouter",
    "OfficeRouter",
    "SurveyRouter",
    "ROUTERS",
    "QUEUEING_ENTITY_TYPES",
]
