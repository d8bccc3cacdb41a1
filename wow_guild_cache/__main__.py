"""Run the service with uvicorn."""

import uvicorn

from .core.config import get_settings


def main():
    settings = get_settings()
    uvicorn.run(
        "wow_guild_cache.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.server.reload
    )


if __name__ == "__main__":
    main()
