"""Run the budget planner API with uvicorn."""

import uvicorn

from components.core import config
from restapi.router import create_app

app = create_app()

if __name__ == "__main__":
    settings = config.get_settings()
    uvicorn.run("main:app", reload=settings.DEBUG, log_level=settings.LOG_LEVEL.lower())
