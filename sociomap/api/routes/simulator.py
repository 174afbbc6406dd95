"""POST /api/simulator: budget-per-capita policy simulation."""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse

from sociomap.api.schemas import ErrorResponse, SimulationRequest, SimulationResponse
from sociomap.services.metrics import metrics
from sociomap.services.simulator import simulate, to_text

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["simulator"])


class NonFiniteJSONResponse(JSONResponse):
    """JSON response that writes ``Infinity``/``NaN`` instead of failing."""

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=True,
            indent=None,
            separators=(",", ":"),
        ).encode("utf-8")


@router.post(
    "/simulator",
    summary="Run a policy simulation",
    description=(
        "Compute `(budget / targetPopulation) * multiplier` where the "
        "multiplier is 1.2 for economic-equity, 1.5 for public-health, 0.9 "
        "for disaster-preparedness and 1.0 otherwise. Inputs are not "
        "validated: a zero population gives `Infinity` and missing values "
        "give `NaN`."
    ),
    response_class=NonFiniteJSONResponse,
    responses={
        200: {"model": SimulationResponse},
        500: {"model": ErrorResponse, "description": "Unexpected internal error"},
    },
    openapi_extra=SimulationRequest.openapi_body(),
)
async def post_simulator(payload: Any = Body(None)):
    body = SimulationRequest.from_payload(payload)
    category = (
        to_text(body.policy_category)
        if "policy_category" in body.model_fields_set
        else "undefined"
    )
    try:
        result = simulate(body.budget, body.target_population, body.policy_category)
        metrics.inc_simulation()
        return NonFiniteJSONResponse(
            {
                "result": result,
                "message": f"Simulation complete for {category}",
            }
        )
    except Exception as exc:
        logger.exception("Simulation failed: %s", exc)
        return JSONResponse(status_code=500, content={"error": str(exc)})
