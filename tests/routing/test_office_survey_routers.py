"""Tests for office and survey routing (list-shaped reads)."""

from __future__ import annotations

import pytest

from fieldsync.mode import ConnectivityMode
from fieldsync.routing import OfficeRouter, SurveyRouter
from tests.conftest import MOCK_OFFICES, MOCK_SURVEY, SAMPLE_SURVEY_ID


@pytest.fixture
def offices(mock_api, store, mode, tasks):
    return OfficeRouter(mock_api, store, mode, tasks)


@pytest.fixture
def surveys(mock_api, store, mode, tasks):
    return SurveyRouter(mock_api, store, mode, tasks)


@pytest.mark.asyncio
async def test_offices_by_mode(offices, mode, tasks, mock_api):
    assert await offices.get_offices() == MOCK_OFFICES
    await tasks.drain()

    mode.set_mode(ConnectivityMode.OFFLINE)
    assert await offices.get_offices() == MOCK_OFFICES

    mode.set_mode(ConnectivityMode.UNKNOWN)
    assert await offices.get_offices() == []
    mock_api.offices.list.assert_awaited_once()


@pytest.mark.asyncio
async def test_offline_offices_empty_cache(offices, mode):
    mode.set_mode(ConnectivityMode.OFFLINE)
    assert await offices.get_offices() == []


@pytest.mark.asyncio
async def test_surveys_by_mode(surveys, mode, tasks):
    assert await surveys.get_all_surveys() == [MOCK_SURVEY]
    await tasks.drain()

    mode.set_mode(ConnectivityMode.OFFLINE)
    assert await surveys.get_all_surveys() == [MOCK_SURVEY]
    assert await surveys.database_surveys() == [MOCK_SURVEY]

    mode.set_mode(ConnectivityMode.UNKNOWN)
    assert await surveys.get_all_surveys() == []


@pytest.mark.asyncio
async def test_survey_questions_and_responses_offline(surveys, mode):
    await surveys.sync_survey_in_database(MOCK_SURVEY)
    for question in MOCK_SURVEY["questionDatas"]:
        await surveys.sync_question_data_in_database(SAMPLE_SURVEY_ID, question)
        for response in question["responseDatas"]:
            await surveys.sync_response_data_in_database(question["id"], response)

    mode.set_mode(ConnectivityMode.OFFLINE)
    questions = await surveys.get_database_question_datas(SAMPLE_SURVEY_ID)
    assert [q["id"] for q in questions] == [11]
    responses = await surveys.get_database_response_datas(11)
    assert responses == [{"id": 101, "text": "None", "value": 0}]


@pytest.mark.asyncio
async def test_survey_online_only_calls(surveys, mode, mock_api):
    mode.set_mode(ConnectivityMode.OFFLINE)
    await surveys.get_survey(SAMPLE_SURVEY_ID)
    await surveys.submit_score(SAMPLE_SURVEY_ID, {"clientId": 42, "scorecardValues": []})

    mock_api.surveys.get.assert_awaited_once_with(SAMPLE_SURVEY_ID)
    mock_api.surveys.submit_score.assert_awaited_once()
