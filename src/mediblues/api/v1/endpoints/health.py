"""Liveness, readiness and database health probes."""
import time

from fastapi import APIRouter, Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from ....core.responses import HealthCheck, HealthResponse
from ....db.session import DbSession

router = APIRouter()


async def _probe_database(db: AsyncSession) -> HealthCheck:
    started = time.perf_counter()
    try:
        await db.execute(text("SELECT 1"))
    except Exception as exc:  # noqa: BLE001
        return HealthCheck(status="unhealthy", message=str(exc))
    return HealthCheck(
        status="healthy",
        latency_ms=round((time.perf_counter() - started) * 1000, 2),
        message="Connected",
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service and database health",
)
async def health_check(request: Request, db: DbSession) -> HealthResponse:
    """Report service metadata and whether the database answers.

    Always returns 200; a failed component shows up as ``unhealthy``.
    """
    settings = request.app.state.settings
    checks = {"database": await _probe_database(db)}
    healthy = all(check.status == "healthy" for check in checks.values())
    return HealthResponse(
        status="healthy" if healthy else "unhealthy",
        service=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
        checks=checks,
    )


@router.get("/ready", summary="Readiness probe")
async def readiness_probe(db: DbSession) -> dict[str, str]:
    # Errors propagate so the probe fails with 500
    await db.execute(text("SELECT 1"))
    return {"status": "ready"}


@router.get("/live", summary="Liveness probe")
async def liveness_probe() -> dict[str, str]:
    return {"status": "alive"}
