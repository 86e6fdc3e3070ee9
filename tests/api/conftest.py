from typing import Generator
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient
from pytest_mock import MockerFixture

from src.agent.client import AgentClient
from src.agent.dependencies import get_agent_client
from src.config import Settings, get_settings
from src.main import app


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        OPENAI_API_KEY="sk-test",
        PERPLEXITY_API_KEY="pplx-test",
        CURSOR_API_KEY="cursor-test",
    )


@pytest.fixture
def mock_agent_client(mocker: MockerFixture) -> Mock:
    client = mocker.Mock(spec=AgentClient)
    client.submit = mocker.AsyncMock()
    client.wait_for_result = mocker.AsyncMock()
    client.run = mocker.AsyncMock()
    return client


@pytest.fixture
def test_client(
    test_settings: Settings, mock_agent_client: Mock
) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_agent_client] = lambda: mock_agent_client
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
