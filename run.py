"""Run the HeartsHeal breathing FastAPI application with uvicorn."""

import uvicorn

from heartsheal.application.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "heartsheal.application.api:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
        log_level=settings.log_level.lower(),
    )
