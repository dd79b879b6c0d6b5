"""
pagedemo — Server Entry Point
==============================

Runs the application under uvicorn using the configured host and port:

    python -m pagedemo
    pagedemo            (console script)
"""

import uvicorn

from pagedemo.config import settings


def main() -> None:
    uvicorn.run(
        "pagedemo.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
