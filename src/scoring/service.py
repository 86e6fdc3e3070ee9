import logging
from openai import APIError, AsyncOpenAI, OpenAI
from openai.types.chat import (
    ChatCompletionSystemMessageParam,
    ChatCompletionUserMessageParam,
)

from src.agent.client import AgentClient
from src.common.exceptions import UpstreamException
from src.llm_providers.exceptions import handle_openai_client_error
from src.scoring.competitors import extract_competitors
from src.scoring.parsing import extract_product_name, parse_prompts
from src.scoring.prompts import (
    ASSISTANT_SYSTEM_PROMPT,
    MENTION_CHECK_SYSTEM_PROMPT,
    PROMPT_GENERATION_SYSTEM_PROMPT,
    TOOL_ANALYSIS_SYSTEM_PROMPT,
    get_mention_check_prompt,
    get_prompt_generation_prompt,
    get_tool_analysis_prompt,
    with_agent_instruction,
)
from src.scoring.schemas import GeneratedPrompts, PromptTestResult, ScoreResult

logger = logging.getLogger(__name__)


def is_mentioned(product_name: str, response: str) -> bool:
    return bool(product_name) and product_name.lower() in response.lower()


def summarize_results(
    *,
    prompts: list[str],
    prompt_results: list[PromptTestResult],
    max_competitors: int,
    details: str | None = None,
) -> ScoreResult:
    score = sum(1 for result in prompt_results if result.mentioned)

    competitors: list[str] = []
    for result in prompt_results:
        for competitor in result.competitors:
            if competitor not in competitors:
                competitors.append(competitor)

    return ScoreResult(
        score=score,
        total_tests=len(prompts),
        prompts=prompts,
        prompt_results=prompt_results,
        competitors=competitors[:max_competitors],
        product_mentioned=score > 0,
        details=details,
    )


class ScoringService:
    """Scores a product using only the research and prompt models."""

    def __init__(
        self,
        *,
        research_client: OpenAI,
        prompt_client: OpenAI,
        research_model: str,
        prompt_model: str,
        prompt_count: int,
        max_competitors: int,
    ):
        self.research_client = research_client
        self.prompt_client = prompt_client
        self.research_model = research_model
        self.prompt_model = prompt_model
        self.prompt_count = prompt_count
        self.max_competitors = max_competitors

    def _complete(
        self, client: OpenAI, model: str, system_prompt: str, user_prompt: str
    ) -> str:
        try:
            response = client.chat.completions.create(
                model=model,
                messages=[
                    ChatCompletionSystemMessageParam(role="system", content=system_prompt),
                    ChatCompletionUserMessageParam(role="user", content=user_prompt),
                ],
            )
        except APIError as e:
            handle_openai_client_error(e, model)
            raise e

        content = response.choices[0].message.content
        if not content:
            raise UpstreamException(f"Model '{model}' returned an empty response")
        return content

    def analyze_tool(self, link: str) -> str:
        return self._complete(
            self.research_client,
            self.research_model,
            TOOL_ANALYSIS_SYSTEM_PROMPT,
            get_tool_analysis_prompt(link),
        )

    def generate_prompts(self, link: str) -> GeneratedPrompts:
        tool_context = self.analyze_tool(link)
        prompts_text = self._complete(
            self.prompt_client,
            self.prompt_model,
            PROMPT_GENERATION_SYSTEM_PROMPT,
            get_prompt_generation_prompt(tool_context, self.prompt_count),
        )
        prompts = parse_prompts(prompts_text)
        product_name = extract_product_name(tool_context)
        logger.info(f"Generated {len(prompts)} prompts for '{product_name}'")

        return GeneratedPrompts(
            prompts=prompts, product_name=product_name, tool_context=tool_context
        )

    def score_with_research(self, link: str) -> ScoreResult:
        generated = self.generate_prompts(link)
        prompt_results: list[PromptTestResult] = []

        for i, prompt in enumerate(generated.prompts):
            try:
                recommendation = self._complete(
                    self.research_client,
                    self.research_model,
                    ASSISTANT_SYSTEM_PROMPT,
                    prompt,
                )
            except UpstreamException as e:
                logger.warning(f"Skipping prompt {i + 1}: {e}")
                continue

            prompt_results.append(
                PromptTestResult(
                    prompt=prompt,
                    mentioned=is_mentioned(generated.product_name, recommendation),
                    response=recommendation,
                    competitors=extract_competitors(
                        recommendation, exclude=generated.product_name
                    ),
                )
            )

        return summarize_results(
            prompts=generated.prompts,
            prompt_results=prompt_results,
            max_competitors=self.max_competitors,
            details=generated.tool_context,
        )


class AgentScoringService:
    """Scores a product by asking the background agent each prompt."""

    def __init__(
        self,
        *,
        agent_client: AgentClient,
        prompt_client: AsyncOpenAI | None,
        prompt_model: str,
        max_competitors: int,
    ):
        self.agent_client = agent_client
        self.prompt_client = prompt_client
        self.prompt_model = prompt_model
        self.max_competitors = max_competitors

    async def classify_mention(self, product_name: str, answer: str) -> bool:
        if self.prompt_client is None:
            return is_mentioned(product_name, answer)

        try:
            response = await self.prompt_client.chat.completions.create(
                model=self.prompt_model,
                messages=[
                    ChatCompletionSystemMessageParam(
                        role="system", content=MENTION_CHECK_SYSTEM_PROMPT
                    ),
                    ChatCompletionUserMessageParam(
                        role="user",
                        content=get_mention_check_prompt(product_name, answer),
                    ),
                ],
            )
        except APIError as e:
            logger.warning(f"Mention check failed, treating as not mentioned: {e}")
            return False

        verdict = (response.choices[0].message.content or "").strip().lower()
        return verdict.rstrip(".") == "yes"

    async def test_prompt(self, prompt: str, product_name: str) -> PromptTestResult:
        answer = await self.agent_client.run(with_agent_instruction(prompt))
        mentioned = await self.classify_mention(product_name, answer)

        return PromptTestResult(
            prompt=prompt,
            mentioned=mentioned,
            response=answer,
            competitors=extract_competitors(answer, exclude=product_name),
        )

    async def test_prompts(self, prompts: list[str], product_name: str) -> ScoreResult:
        prompt_results: list[PromptTestResult] = []

        for i, prompt in enumerate(prompts):
            logger.info(f"Testing prompt {i + 1}/{len(prompts)}: {prompt[:50]}")
            try:
                answer = await self.agent_client.run(prompt)
            except UpstreamException as e:
                logger.error(f"Error testing prompt {i + 1}: {e}")
                prompt_results.append(
                    PromptTestResult(prompt=prompt, mentioned=False, response=f"Error: {e}")
                )
                continue

            mentioned = is_mentioned(product_name, answer)
            if mentioned:
                logger.info(f"Product mentioned in prompt {i + 1}")

            prompt_results.append(
                PromptTestResult(
                    prompt=prompt,
                    mentioned=mentioned,
                    response=answer,
                    competitors=extract_competitors(answer, exclude=product_name),
                )
            )

        return summarize_results(
            prompts=prompts,
            prompt_results=prompt_results,
            max_competitors=self.max_competitors,
        )
