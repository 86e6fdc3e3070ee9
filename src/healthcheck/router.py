from typing import Any
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.config import Settings, get_settings

router = APIRouter()


def _credential_status(name: str, value: str | None) -> dict[str, Any]:
    if value:
        return {"status": "ok"}
    return {"status": "error", "message": f"{name} is not set"}


@router.get(
    "/healthcheck",
    tags=["Healthcheck"],
    status_code=status.HTTP_200_OK,
    responses={
        200: {
            "description": "Healthcheck status",
            "content": {
                "application/json": {
                    "example": {
                        "api": {"status": "ok"},
                        "research_model": {"status": "ok"},
                        "prompt_model": {"status": "ok"},
                        "agent": {"status": "ok"},
                    }
                }
            },
        },
        503: {
            "description": "Service unavailable",
            "content": {
                "application/json": {
                    "example": {
                        "api": {"status": "ok"},
                        "research_model": {"status": "ok"},
                        "prompt_model": {"status": "ok"},
                        "agent": {
                            "status": "error",
                            "message": "CURSOR_API_KEY is not set",
                        },
                    }
                }
            },
        },
    },
)
def healthcheck(settings: Settings = Depends(get_settings)) -> JSONResponse:
    health_status: dict[str, Any] = {
        "api": {"status": "ok"},
        "research_model": _credential_status(
            "PERPLEXITY_API_KEY", settings.PERPLEXITY_API_KEY
        ),
        "prompt_model": _credential_status("OPENAI_API_KEY", settings.OPENAI_API_KEY),
        "agent": _credential_status("CURSOR_API_KEY", settings.CURSOR_API_KEY),
    }
    has_error = any(check["status"] == "error" for check in health_status.values())

    if has_error:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=health_status
        )

    return JSONResponse(status_code=status.HTTP_200_OK, content=health_status)
