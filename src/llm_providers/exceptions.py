import logging
from openai import APIError, AuthenticationError, PermissionDeniedError

from src.common.exceptions import (
    KnownException,
    ResourceNotFoundException,
    ResourceType,
    UpstreamException,
)

logger = logging.getLogger(__name__)


def handle_openai_client_error(e: APIError, model: str) -> None:
    # OpenAI Model Not Found
    if e.code == "model_not_found":
        raise ResourceNotFoundException(
            ResourceType.MODEL,
            model,
            f"Model '{model}' not found, or you do not have access to it.",
        )

    # Perplexity reports unknown models as a bad request
    if "Invalid model" in e.message:
        raise ResourceNotFoundException(
            ResourceType.MODEL,
            model,
            f"Model '{model}' not found, or you do not have access to it.",
        )

    if isinstance(e, (AuthenticationError, PermissionDeniedError)):
        raise KnownException(f"API key rejected when calling model '{model}'.")

    logger.error(e)

    raise UpstreamException(
        f"Error calling model '{model}'. Verify the model exists and the provider is reachable."
    )
