from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sociomap.api.exception_handlers import (
    http_exception_handler,
    sociomap_error_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from sociomap.api.middleware import RequestLoggingMiddleware
from sociomap.api.routes.recommendations import router as recommendations_router
from sociomap.api.routes.simulator import router as simulator_router
from sociomap.config import Settings, settings as env_settings
from sociomap.errors import SocioMapError
from sociomap.logging_config import setup_logging
from sociomap.services.generator import TextGenerator, build_text_generator
from sociomap.services.metrics import metrics

logger = logging.getLogger("sociomap")

_DESCRIPTION = """\
Community policy recommendations and budget simulation.

Describe a community and its location to receive **Economic Equity**,
**Public Health** and **Disaster Preparedness** policy recommendations
generated by a large language model, or run a simple per-capita budget
simulation for a policy category.

### Errors

Every error response is JSON of the form `{"error": "<message>"}`.
"""

_OPENAPI_TAGS = [
    {"name": "system", "description": "Liveness and operational endpoints."},
    {
        "name": "recommendations",
        "description": "LLM-generated policy recommendations per category.",
    },
    {
        "name": "simulator",
        "description": "Budget-per-capita simulation with category multipliers.",
    },
]


def create_app(
    settings: Settings | None = None,
    text_generator: TextGenerator | None = None,
) -> FastAPI:
    """Build the ASGI application around an explicit configuration."""
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level, settings.log_format)
        logger.info(
            "SocioMap API starting (provider=%s, environment=%s)",
            settings.llm_provider,
            settings.environment,
        )
        yield

    app = FastAPI(
        title="SocioMap API",
        version="0.1.0",
        summary="AI policy recommendations for social equity and community resilience",
        description=_DESCRIPTION,
        openapi_tags=_OPENAPI_TAGS,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.text_generator = text_generator or build_text_generator(settings)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SocioMapError, sociomap_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # CORS: any origin by default
    origins = settings.cors_origin_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(recommendations_router)
    app.include_router(simulator_router)

    @app.get(
        "/",
        tags=["system"],
        summary="Liveness check",
        response_class=PlainTextResponse,
    )
    async def root():
        return "SocioMap API is running"

    @app.get(
        "/metrics",
        tags=["system"],
        summary="Application metrics",
        description="Request counters, per-category generation outcomes, "
        "simulation count and latency percentiles.",
    )
    async def get_metrics():
        return metrics.snapshot()

    return app


app = create_app(env_settings)
