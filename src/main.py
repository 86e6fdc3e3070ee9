import logging
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from src.common.exceptions import (
    KnownException,
    ResourceNotFoundException,
    UpstreamException,
    UpstreamTimeoutException,
    known_exception_handler,
    resource_not_found_handler,
    unexpected_exception_handler,
    upstream_exception_handler,
    upstream_timeout_handler,
    validation_exception_handler,
    internal_error_response,
    validation_error_response,
)
from src.common.opentelemetry import setup_opentelemetry
from src.config import get_settings
from src.agent.router import router as agent_router
from src.analysis.router import router as analysis_router
from src.scoring.router import router as scoring_router
from src.healthcheck.router import router as health_router

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
)

logger = logging.getLogger(__name__)


app = FastAPI(
    title=settings.API_NAME,
    summary=settings.API_SUMMARY,
    responses={
        **internal_error_response,
        **validation_error_response,
    },
    version=settings.APP_VERSION,
)

if settings.OTEL_ENABLED:
    setup_opentelemetry(settings.OTEL_SERVICE_NAME, app)

if settings.CORS_ENABLED:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.exception_handler(RequestValidationError)(validation_exception_handler)
app.exception_handler(ResourceNotFoundException)(resource_not_found_handler)
app.exception_handler(KnownException)(known_exception_handler)
app.exception_handler(UpstreamTimeoutException)(upstream_timeout_handler)
app.exception_handler(UpstreamException)(upstream_exception_handler)
app.exception_handler(Exception)(unexpected_exception_handler)


app.include_router(health_router)
app.include_router(analysis_router)
app.include_router(agent_router)
app.include_router(scoring_router)
