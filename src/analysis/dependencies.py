from fastapi import Depends
from openai import OpenAI

from src.analysis.service import AnalysisService
from src.config import Settings, get_settings
from src.llm_providers.client import get_research_openai_client


def get_analysis_service(
    settings: Settings = Depends(get_settings),
    research_client: OpenAI = Depends(get_research_openai_client),
) -> AnalysisService:
    return AnalysisService(
        research_client=research_client,
        research_model=settings.RESEARCH_MODEL,
    )
