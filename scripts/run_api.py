#!/usr/bin/env python3
"""
API Server Runner Script
"""

import uvicorn

from ahp_service.config import settings
from ahp_service.logging_config import configure_logging


def main():
    """Run the FastAPI server."""
    configure_logging()

    uvicorn.run(
        "ahp_service.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    main()
