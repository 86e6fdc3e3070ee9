from fastapi import APIRouter, Depends

from src.analysis.dependencies import get_analysis_service
from src.analysis.schemas import AnalysisResponse, CreateAnalysisRequest
from src.analysis.service import AnalysisService
from src.common.exceptions import (
    ResourceType,
    resource_not_found_response,
    upstream_error_response,
)


router = APIRouter(
    prefix="/analyze",
    tags=[
        "Analysis",
    ],
)


@router.post(
    "",
    responses={
        **resource_not_found_response(ResourceType.MODEL),
        **upstream_error_response,
    },
)
def analyze(
    analysis_input: CreateAnalysisRequest,
    analysis_service: AnalysisService = Depends(get_analysis_service),
) -> AnalysisResponse:
    return analysis_service.analyze(analysis_input)
