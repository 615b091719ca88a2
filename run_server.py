#!/usr/bin/env python3
"""
Simple server launcher
"""
import uvicorn
from psys.utils.config import settings

if __name__ == "__main__":
    print("="*70)
    print(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    print("="*70)
    print(f"* Port: {settings.PORT}")
    print(f"* History window: {settings.HISTORY_LIMIT} sessions")
    print(f"* Configuration: .env")
    print("\nStarting server...\n")

    uvicorn.run(
        "psys.api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower()
    )
