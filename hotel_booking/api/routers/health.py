"""
Health check endpoints for monitoring and orchestration.

- /health: liveness, always 200 while the process runs
- /health/ready: readiness; reports the supplier circuit state
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pybreaker import STATE_OPEN

from hotel_booking.api.deps import get_use_cases
from hotel_booking.config import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic liveness probe."""
    return {"status": "ok", "service": "hotel-booking-api"}


@router.get("/health/ready")
async def health_check_ready(
    settings: Settings = Depends(get_settings),
    use_cases=Depends(get_use_cases),
):
    """
    Readiness probe.

    Not ready while the supplier circuit breaker is open: every supplier
    call would fail fast.
    """
    health_status = {
        "status": "ready",
        "checks": {"supplier": "stub" if settings.use_in_memory else "http"},
    }

    breaker = getattr(use_cases["gateway"], "breaker", None)
    if breaker is not None:
        circuit_state = breaker.current_state
        health_status["checks"]["supplier_circuit"] = circuit_state
        if circuit_state == STATE_OPEN:
            logger.error("Readiness check: supplier circuit open")
            health_status["status"] = "not_ready"
            return JSONResponse(status_code=503, content=health_status)

    return health_status
