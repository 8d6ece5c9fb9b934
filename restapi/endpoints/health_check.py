"""Liveness probe."""

from fastapi import APIRouter

from components.core import config, schemas

router = APIRouter(prefix="/health_check", tags=["services"])


@router.get("/", response_model=schemas.HealthCheck)
async def health_check() -> schemas.HealthCheck:
    """Report that the service is up."""
    return schemas.HealthCheck(service_name=config.get_settings().SERVICE_NAME, status="healthy")
