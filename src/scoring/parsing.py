import json
import logging
import re
from typing import Any

from src.scoring.exceptions import PromptParseError

logger = logging.getLogger(__name__)

JSON_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")
JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")
PRODUCT_NAME_PATTERN = re.compile(r"product name[:\s]+([^\n.]+)", re.IGNORECASE)


def extract_json(text: str) -> str:
    """Pull the JSON payload out of a model response.

    Models often wrap JSON in markdown fences or surround it with prose.
    """
    cleaned = text.strip()

    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]

    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]

    cleaned = cleaned.strip()

    if cleaned.startswith("[") or cleaned.startswith("{"):
        return cleaned

    if array_match := JSON_ARRAY_PATTERN.search(cleaned):
        return array_match.group(0)

    if object_match := JSON_OBJECT_PATTERN.search(cleaned):
        return object_match.group(0)

    return cleaned


def parse_prompts(text: str) -> list[str]:
    try:
        prompts: Any = json.loads(extract_json(text))
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse prompts. Raw response: {text}")
        raise PromptParseError("Failed to parse prompts from model response", text) from e

    if not isinstance(prompts, list):
        raise PromptParseError("Prompt response is not a JSON array", text)

    if not prompts:
        raise PromptParseError("No prompts generated", text)

    return [str(prompt) for prompt in prompts]


def extract_product_name(tool_context: str) -> str:
    match = PRODUCT_NAME_PATTERN.search(tool_context)
    if not match:
        return ""
    return match.group(1).strip().strip("*_`:\"' ").strip()
