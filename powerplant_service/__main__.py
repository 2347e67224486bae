"""Run the power plant service with uvicorn."""

import uvicorn

from .config import settings

if __name__ == "__main__":
    uvicorn.run(
        "powerplant_service.app:app",
        host=settings.SERVICE_HOST,
        port=settings.SERVICE_PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
