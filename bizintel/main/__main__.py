"""
Main module entry point.

Runs the API as: python -m bizintel.main
"""

import uvicorn

from .config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "bizintel.main.app:app",
        host=settings.service.host,
        port=settings.service.port,
        reload=settings.service.reload,
    )


if __name__ == "__main__":
    main()
