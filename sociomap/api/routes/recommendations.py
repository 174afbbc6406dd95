"""POST /api/recommendations/* endpoints."""

from __future__ import annotations

import math
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import APIRouter, Body, Depends

from sociomap.api.dependencies import get_text_generator
from sociomap.api.schemas import (
    AllRecommendationsResponse,
    ErrorResponse,
    RecommendationRequest,
    RecommendationResponse,
)
from sociomap.errors import ValidationError
from sociomap.services.generator import TextGenerator
from sociomap.services.prompts import CATEGORIES, Category
from sociomap.services.recommender import (
    generate_all_recommendations,
    generate_recommendations,
)

router = APIRouter(prefix="/api/recommendations", tags=["recommendations"])

MISSING_FIELDS = "Location and description are required"

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Location or description missing"},
    500: {"model": ErrorResponse, "description": "Text generation failed"},
}


def _present(value: Any) -> bool:
    """Truthiness where empty arrays and objects still count as given."""
    if isinstance(value, (list, dict)):
        return True
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def _require_fields(payload: Any) -> tuple[str, str]:
    body = RecommendationRequest.from_payload(payload)
    if not _present(body.location) or not _present(body.description):
        raise ValidationError(MISSING_FIELDS)
    return str(body.location), str(body.description)


def _category_endpoint(
    category: Category,
) -> Callable[..., Awaitable[dict[str, str]]]:
    async def endpoint(
        payload: Any = Body(None),
        generator: TextGenerator = Depends(get_text_generator),
    ) -> dict[str, str]:
        location, description = _require_fields(payload)
        text = await generate_recommendations(generator, location, description, category)
        return {"recommendations": text}

    endpoint.__name__ = f"post_{category.slug.replace('-', '_')}"
    return endpoint


for _category in CATEGORIES:
    router.add_api_route(
        f"/{_category.slug}",
        _category_endpoint(_category),
        methods=["POST"],
        summary=f"{_category.label} recommendations",
        description=(
            f"Generate 3-5 {_category.label} policy recommendations for the "
            "described community."
        ),
        response_model=RecommendationResponse,
        responses=_ERROR_RESPONSES,
        openapi_extra=RecommendationRequest.openapi_body(),
    )


@router.post(
    "/all",
    summary="Recommendations for every category",
    description=(
        "Generate recommendations for all three categories concurrently. "
        "If any category fails the whole request fails."
    ),
    response_model=AllRecommendationsResponse,
    responses=_ERROR_RESPONSES,
    openapi_extra=RecommendationRequest.openapi_body(),
)
async def post_all(
    payload: Any = Body(None),
    generator: TextGenerator = Depends(get_text_generator),
):
    location, description = _require_fields(payload)
    return await generate_all_recommendations(generator, location, description)
