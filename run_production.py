#!/usr/bin/env python3
"""
Server runner.

Development mode enables hot reload. Production mode adds uvloop and
httptools but keeps a single worker: groups and applications live in
process memory, so several workers would each hold their own copy.
"""

import uvicorn

from app.core.config import get_settings


def run_server():
    """Run the FastAPI server with environment-specific configuration."""
    settings = get_settings()

    # Base configuration
    config = {
        "app": "app.main:app",
        "host": "0.0.0.0",
        "port": 6769,
        "access_log": True,
        "log_level": settings.log_level.lower(),
        "workers": 1,
    }

    if settings.environment == "development":
        config.update({
            "reload": True,
            "reload_dirs": ["app"],
        })
    else:
        config.update({
            "loop": "uvloop",
            "http": "httptools",
            "reload": False,
            "access_log": False,
        })

    uvicorn.run(**config)

if __name__ == "__main__":
    run_server()
