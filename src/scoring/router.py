import logging
from fastapi import APIRouter, Depends
from fastapi.responses import Response

from src.common.exceptions import (
    ResourceType,
    resource_not_found_response,
    upstream_error_response,
    upstream_timeout_response,
)
from src.scoring.dependencies import (
    get_agent_scoring_service,
    get_classifying_agent_scoring_service,
    get_scoring_service,
)
from src.scoring.report import build_csv_report, report_filename
from src.scoring.schemas import (
    GeneratedPrompts,
    LinkRequest,
    PromptBatchRequest,
    PromptTestResult,
    ReportRequest,
    ScoreResult,
    SinglePromptRequest,
)
from src.scoring.service import AgentScoringService, ScoringService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/scores",
    tags=["Scores"],
)


@router.post(
    "/prompts",
    responses={
        **resource_not_found_response(ResourceType.MODEL),
        **upstream_error_response,
    },
)
def generate_prompts(
    link_input: LinkRequest,
    scoring_service: ScoringService = Depends(get_scoring_service),
) -> GeneratedPrompts:
    return scoring_service.generate_prompts(link_input.link)


@router.post(
    "/research",
    responses={
        **resource_not_found_response(ResourceType.MODEL),
        **upstream_error_response,
    },
)
def score_with_research(
    link_input: LinkRequest,
    scoring_service: ScoringService = Depends(get_scoring_service),
) -> ScoreResult:
    return scoring_service.score_with_research(link_input.link)


@router.post("/test")
async def run_prompt_tests(
    batch_input: PromptBatchRequest,
    scoring_service: AgentScoringService = Depends(get_agent_scoring_service),
) -> ScoreResult:
    return await scoring_service.test_prompts(
        batch_input.prompts, batch_input.product_name
    )


@router.post(
    "/test-single",
    responses={**upstream_error_response, **upstream_timeout_response},
)
async def run_single_prompt_test(
    prompt_input: SinglePromptRequest,
    scoring_service: AgentScoringService = Depends(
        get_classifying_agent_scoring_service
    ),
) -> PromptTestResult:
    logger.info(
        f"Testing prompt {prompt_input.index + 1}: {prompt_input.prompt[:50]}"
    )
    result = await scoring_service.test_prompt(
        prompt_input.prompt, prompt_input.product_name
    )
    logger.info(f"Prompt {prompt_input.index + 1} - Mentioned: {result.mentioned}")
    return result


@router.post(
    "/report",
    response_class=Response,
    responses={
        200: {
            "description": "CSV report of prompt test results",
            "content": {"text/csv": {}},
        }
    },
)
def download_report(report_input: ReportRequest) -> Response:
    return Response(
        content=build_csv_report(report_input.prompt_results),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{report_filename()}"'
        },
    )
