from typing import Any, AsyncGenerator
from unittest.mock import Mock

import pytest
from aiohttp import ClientResponse
from pytest_mock import MockerFixture

from src.agent.client import AgentClient
from tests.unit.agent.utils import FakeClock


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
async def agent_client(fake_clock: FakeClock) -> AsyncGenerator[AgentClient, None]:
    async with AgentClient(
        api_key="test-key",
        base_url="https://agents.test/v0",
        source_repository="https://github.com/example/empty",
        source_ref="main",
        user_agent="test-agent",
        poll_interval=3.0,
        max_wait=300.0,
        poll_error_retries=2,
        clock=fake_clock,
        sleep=fake_clock.sleep,
    ) as client:
        yield client


@pytest.fixture
def make_response(mocker: MockerFixture):
    def _make_response(
        status: int, json_data: Any = None, text: str = ""
    ) -> Mock:
        response = mocker.Mock(spec=ClientResponse)
        response.status = status
        response.json.return_value = json_data
        response.text.return_value = text
        return response

    return _make_response
