"""Budget planner application factory."""

import fastapi
from fastapi.middleware import cors
from fastapi.openapi.utils import get_openapi

from components.core import config, init_db
from components.core.logging_config import setup_logging
from restapi.endpoints import (
    account,
    budget,
    goal,
    health_check,
    helpers,
    installment,
    plan,
    transaction,
)

DESCRIPTION = "Monthly budget snapshots, transactions, installments and savings goals"
ROUTERS = (
    health_check.router,
    budget.router,
    plan.router,
    account.router,
    transaction.router,
    installment.router,
    goal.router,
    helpers.router,
)


def create_app() -> fastapi.FastAPI:
    """Build the FastAPI app with logging, storage and every router wired in."""
    settings = config.get_settings()
    setup_logging(settings.LOG_LEVEL, settings.SERVICE_NAME)

    app = fastapi.FastAPI(
        title=settings.SERVICE_NAME,
        description=DESCRIPTION,
        version="1.0.0",
        debug=settings.DEBUG,
        lifespan=init_db.lifespan,
    )

    # The API is consumed by a browser client on another origin
    app.add_middleware(
        cors.CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for router in ROUTERS:
        app.include_router(router)

    def budget_openapi():
        if app.openapi_schema is None:
            app.openapi_schema = get_openapi(
                title=settings.SERVICE_NAME,
                version=f"1.0.0 ({settings.API_VERSION})",
                description=DESCRIPTION,
                routes=app.routes,
                tags=[{"name": "services", "description": "Service status"}],
            )
        return app.openapi_schema

    app.openapi = budget_openapi

    return app
