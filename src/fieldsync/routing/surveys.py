"""Survey router.

Surveys are cached as whole entities. Their questions and each question's
response options can also be stored as child rows, so an offline scorecard
form can be rebuilt per survey.
"""

from __future__ import annotations

from typing import Any

from .base import EntityRouter, ReadOp

QUESTION_TYPE = "survey_question"
RESPONSE_TYPE = "survey_response"


class SurveyRouter(EntityRouter):
    entity_type = "survey"

    async def _read_cached(self) -> list[dict[str, Any]]:
        return (await self._store.read_all(self.entity_type)).page_items

    async def get_all_surveys(self) -> list[dict[str, Any]]:
        return await self.route(
            ReadOp(
                "get_all_surveys",
                remote=lambda: self._api.surveys.list(),
                local=self._read_cached,
                default=list,
                mirror=self._mirror_list,
            )
        )

    async def database_surveys(self) -> list[dict[str, Any]]:
        return await self._read_cached()

    async def get_survey(self, survey_id: int) -> dict[str, Any]:
        return await self._api.surveys.get(survey_id)

    async def submit_score(self, survey_id: int, scorecard: dict[str, Any]) -> dict[str, Any]:
        return await self._api.surveys.submit_score(survey_id, scorecard)

    async def sync_survey_in_database(self, survey: dict[str, Any]) -> dict[str, Any]:
        return await self.sync_in_database(survey)

    async def sync_question_data_in_database(
        self, survey_id: int, question: dict[str, Any]
    ) -> dict[str, Any]:
        return await self._store.upsert(QUESTION_TYPE, question, parent_id=survey_id)

    async def sync_response_data_in_database(
        self, question_id: int, response: dict[str, Any]
    ) -> dict[str, Any]:
        return await self._store.upsert(RESPONSE_TYPE, response, parent_id=question_id)

    async def get_database_question_datas(self, survey_id: int) -> list[dict[str, Any]]:
        return await self._store.read_children(QUESTION_TYPE, survey_id)

    async def get_database_response_datas(self, question_id: int) -> list[dict[str, Any]]:
        return await self._store.read_children(RESPONSE_TYPE, question_id)
