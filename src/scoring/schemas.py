from pydantic import BaseModel, Field


class LinkRequest(BaseModel):
    link: str = Field(min_length=1)


class GeneratedPrompts(BaseModel):
    prompts: list[str]
    product_name: str
    tool_context: str


class PromptTestResult(BaseModel):
    prompt: str
    mentioned: bool
    response: str
    competitors: list[str] = []


class ScoreResult(BaseModel):
    score: int
    total_tests: int
    prompts: list[str]
    prompt_results: list[PromptTestResult]
    competitors: list[str]
    product_mentioned: bool
    details: str | None = None


class PromptBatchRequest(BaseModel):
    prompts: list[str] = Field(min_length=1)
    product_name: str = Field(min_length=1)


class SinglePromptRequest(BaseModel):
    prompt: str = Field(min_length=1)
    product_name: str = Field(min_length=1)
    index: int = Field(default=0, ge=0)


class ReportRequest(BaseModel):
    prompt_results: list[PromptTestResult]
