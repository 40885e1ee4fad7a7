#!/usr/bin/env python3
"""Run the Prompted Completion Gateway server."""

import uvicorn

from app.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="info",
        http="httptools",  # C-accelerated HTTP parser (faster than h11)
        loop="uvloop",     # faster event loop than asyncio
    )
