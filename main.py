"""Medical Portal - development server entry point."""

import uvicorn

from medportal.config import settings


if __name__ == "__main__":
    uvicorn.run(
        "medportal.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG,
    )
