"""Remote gateway module.

Usage:
    from fieldsync.api import ApiClient

    async with ApiClient.from_settings() as api:
        page = await api.clients.list(offset=0, limit=100)
        saved = await api.centers.create({"name": "North", "officeId": 1})
"""

from .client import ApiClient, ApiConfig
from .clients import ClientsAPI
from .centers import CentersAPI
from .offices import OfficesAPI
from .surveys import SurveysAPI

__all__ = [
    "ApiClient",
    "ApiConfig",
    "ClientsAPI",
    "CentersAPI",
    "OfficesAPI",
    "SurveysAPI",
]
