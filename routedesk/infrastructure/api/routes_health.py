"""Health check endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from routedesk.adapters.persistence.database import get_session
from routedesk.application.ports.advisor_port import AdvisorPort
from routedesk.infrastructure.api.dependencies import get_advisor

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(
    session: AsyncSession = Depends(get_session),
    advisor: AdvisorPort = Depends(get_advisor),
):
    """Check API and database connectivity; report whether the advisor is configured."""
    try:
        result = await session.execute(text("SELECT 1"))
        result.scalar()
        db_status = "connected"
    except Exception as e:
        db_status = f"error: {e}"

    return {
        "status": "ok" if db_status == "connected" else "degraded",
        "database": db_status,
        "advisor": advisor.provider_name if advisor.is_configured else "disabled",
        "service": "routedesk - ticket routing engine",
    }
