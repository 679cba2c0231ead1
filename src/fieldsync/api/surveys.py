"""Surveys API - survey and scorecard operations."""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .client import ApiClient


class SurveysAPI:
    """Surveys API.

    Usage:
        async with ApiClient.from_settings() as api:
            surveys = await api.surveys.list()
            survey = await api.surveys.get(3)
            await api.surveys.submit_score(3, scorecard)
    """

    def __init__(self, client: "ApiClient"):
        self._client = client

    async def list(self) -> list[dict[str, Any]]:
        """All surveys, each including ``questionDatas`` and their ``responseDatas``."""
        return await self._client._get("/surveys")

    async def get(self, survey_id: int) -> dict[str, Any]:
        return await self._client._get(f"/surveys/{survey_id}")

    async def submit_score(self, survey_id: int, scorecard: dict[str, Any]) -> dict[str, Any]:
        """Post a filled scorecard for a survey.

        Args:
            survey_id: The survey ID
            scorecard: {"clientId": ..., "userId": ..., "createdOn": ..., "scorecardValues": [...]}
        """
        return await self._client._post(f"/surveys/{survey_id}/scorecards", scorecard)
