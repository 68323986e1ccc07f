#!/usr/bin/env python3
"""
Convenience script to run the fulfillment server.
"""
import uvicorn
from action_server.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "action_server.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower()
    )
