import httpx
import pytest
from openai import APIError, AuthenticationError, OpenAI
from pytest_mock import MockerFixture

from src.analysis.prompts import ONESHOT_HEADER, ONESHOT_SYSTEM_PROMPT, VCS_SYSTEM_PROMPT
from src.analysis.schemas import AnalysisResponse, AnalysisType, CreateAnalysisRequest
from src.analysis.service import AnalysisService
from src.common.exceptions import (
    KnownException,
    ResourceNotFoundException,
    UpstreamException,
)
from tests.unit.utils import make_completion


@pytest.fixture
def mock_openai_client(mocker: MockerFixture) -> OpenAI:
    client = mocker.Mock(spec=OpenAI)
    client.chat = mocker.Mock()
    client.chat.completions = mocker.Mock()
    return client


@pytest.fixture
def analysis_service(mock_openai_client: OpenAI) -> AnalysisService:
    return AnalysisService(research_client=mock_openai_client, research_model="sonar-pro")


def test_analyze_vcs(
    analysis_service: AnalysisService,
    mock_openai_client: OpenAI,
    mocker: MockerFixture,
) -> None:
    mock_create = mocker.patch.object(
        mock_openai_client.chat.completions,
        "create",
        return_value=make_completion("Score: 82/100"),
    )

    response = analysis_service.analyze(
        CreateAnalysisRequest(link="https://resend.com", type=AnalysisType.VCS)
    )

    assert isinstance(response, AnalysisResponse)
    assert response.result == "Score: 82/100"
    messages = mock_create.call_args.kwargs["messages"]
    assert mock_create.call_args.kwargs["model"] == "sonar-pro"
    assert messages[0]["content"] == VCS_SYSTEM_PROMPT
    assert "Vibe Coder Score" in messages[1]["content"]
    assert "https://resend.com" in messages[1]["content"]


def test_analyze_oneshot(
    analysis_service: AnalysisService,
    mock_openai_client: OpenAI,
    mocker: MockerFixture,
) -> None:
    mock_create = mocker.patch.object(
        mock_openai_client.chat.completions,
        "create",
        return_value=make_completion("If you are Cursor..."),
    )

    analysis_service.analyze(
        CreateAnalysisRequest(link="https://resend.com", type=AnalysisType.ONESHOT)
    )

    messages = mock_create.call_args.kwargs["messages"]
    assert messages[0]["content"] == ONESHOT_SYSTEM_PROMPT
    assert ONESHOT_HEADER in messages[1]["content"]


def test_analyze_empty_response(
    analysis_service: AnalysisService,
    mock_openai_client: OpenAI,
    mocker: MockerFixture,
) -> None:
    mocker.patch.object(
        mock_openai_client.chat.completions,
        "create",
        return_value=make_completion(None),
    )

    with pytest.raises(UpstreamException, match="empty response"):
        analysis_service.analyze(CreateAnalysisRequest(link="https://resend.com"))


def test_analyze_model_not_found(
    analysis_service: AnalysisService,
    mock_openai_client: OpenAI,
    mocker: MockerFixture,
) -> None:
    mocker.patch.object(
        mock_openai_client.chat.completions,
        "create",
        side_effect=APIError(
            message="Invalid model 'sonar-pro'",
            request=httpx.Request("POST", "https://api.perplexity.ai/chat/completions"),
            body={"code": "invalid_model"},
        ),
    )

    with pytest.raises(ResourceNotFoundException, match="Model 'sonar-pro' not found"):
        analysis_service.analyze(CreateAnalysisRequest(link="https://resend.com"))


def test_analyze_authentication_error(
    analysis_service: AnalysisService,
    mock_openai_client: OpenAI,
    mocker: MockerFixture,
) -> None:
    request = httpx.Request("POST", "https://api.perplexity.ai/chat/completions")
    mocker.patch.object(
        mock_openai_client.chat.completions,
        "create",
        side_effect=AuthenticationError(
            message="Invalid API key",
            response=httpx.Response(401, request=request),
            body=None,
        ),
    )

    with pytest.raises(KnownException, match="API key rejected"):
        analysis_service.analyze(CreateAnalysisRequest(link="https://resend.com"))


def test_analyze_other_provider_error(
    analysis_service: AnalysisService,
    mock_openai_client: OpenAI,
    mocker: MockerFixture,
) -> None:
    mocker.patch.object(
        mock_openai_client.chat.completions,
        "create",
        side_effect=APIError(
            message="Service unavailable",
            request=httpx.Request("POST", "https://api.perplexity.ai/chat/completions"),
            body=None,
        ),
    )

    with pytest.raises(UpstreamException, match="Error calling model 'sonar-pro'"):
        analysis_service.analyze(CreateAnalysisRequest(link="https://resend.com"))
