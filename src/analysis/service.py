import logging
from openai import APIError, OpenAI
from openai.types.chat import (
    ChatCompletionSystemMessageParam,
    ChatCompletionUserMessageParam,
)

from src.analysis.prompts import get_analysis_prompts
from src.analysis.schemas import AnalysisResponse, CreateAnalysisRequest
from src.common.exceptions import UpstreamException
from src.llm_providers.exceptions import handle_openai_client_error

logger = logging.getLogger(__name__)


class AnalysisService:
    def __init__(self, *, research_client: OpenAI, research_model: str):
        self.research_client = research_client
        self.research_model = research_model

    def analyze(self, analysis_input: CreateAnalysisRequest) -> AnalysisResponse:
        """Run a research model analysis of a product link."""
        system_prompt, user_prompt = get_analysis_prompts(
            analysis_input.type, analysis_input.link
        )
        logger.info(f"Running {analysis_input.type.value} analysis for {analysis_input.link}")

        try:
            response = self.research_client.chat.completions.create(
                model=self.research_model,
                messages=[
                    ChatCompletionSystemMessageParam(role="system", content=system_prompt),
                    ChatCompletionUserMessageParam(role="user", content=user_prompt),
                ],
            )
        except APIError as e:
            handle_openai_client_error(e, self.research_model)
            raise e

        content = response.choices[0].message.content
        if not content:
            raise UpstreamException("Research model returned an empty response")

        return AnalysisResponse(result=content)
