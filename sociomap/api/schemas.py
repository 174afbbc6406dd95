"""Pydantic request and response models for OpenAPI documentation."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------


class LooseBody(BaseModel):
    """Request body read from whatever JSON the client sent.

    Fields are untyped and optional; a non-object body reads as all-missing.
    Routes take the raw payload and build the model with :meth:`from_payload`,
    so the schema is attached to the route via :meth:`openapi_body`.
    """

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_payload(cls, payload: Any) -> LooseBody:
        if not isinstance(payload, dict):
            return cls()
        return cls.model_validate(payload)

    @classmethod
    def openapi_body(cls) -> dict:
        return {
            "requestBody": {
                "content": {"application/json": {"schema": cls.model_json_schema()}}
            }
        }


class ErrorResponse(BaseModel):
    """Body of every non-2xx JSON response."""

    error: str = Field(..., description="Human-readable error message")


# ---------------------------------------------------------------------------
# /api/recommendations/*
# ---------------------------------------------------------------------------


class RecommendationRequest(LooseBody):
    """Community to generate recommendations for.

    Both fields are required and must be truthy; the route checks this so
    that a missing field produces a 400 with a fixed message. Non-string
    values such as a numeric ZIP code are accepted and rendered as text.
    """

    location: Any = Field(
        None, description="Where the community is located", examples=["Fresno, CA"]
    )
    description: Any = Field(
        None,
        description="Free-text description of the community",
        examples=["Agricultural city with high heat exposure and limited transit"],
    )


class RecommendationResponse(BaseModel):
    """Generated recommendations for a single policy category."""

    recommendations: str = Field(..., description="Model-generated recommendation text")


class AllRecommendationsResponse(BaseModel):
    """Generated recommendations for every policy category."""

    economicEquity: str = Field(..., description="Economic Equity recommendations")
    publicHealth: str = Field(..., description="Public Health recommendations")
    disasterPreparedness: str = Field(
        ..., description="Disaster Preparedness recommendations"
    )


# ---------------------------------------------------------------------------
# /api/simulator
# ---------------------------------------------------------------------------


class SimulationRequest(LooseBody):
    """Simulation inputs. Nothing is validated; bad values yield ``NaN``."""

    budget: Any = Field(None, description="Total budget", examples=[100000])
    target_population: Any = Field(
        None,
        alias="targetPopulation",
        description="Number of people the policy targets",
        examples=[1000],
    )
    policy_category: Any = Field(
        None,
        alias="policyCategory",
        description=(
            "economic-equity, public-health or disaster-preparedness; "
            "anything else uses a multiplier of 1.0"
        ),
        examples=["public-health"],
    )


class SimulationResponse(BaseModel):
    """Simulation outcome. ``result`` may be ``Infinity`` or ``NaN``."""

    result: float = Field(..., description="Budget per capita times category multiplier")
    message: str = Field(..., description="Summary message")
