"""``python -m instruments_api`` serves the API with uvicorn."""

import uvicorn

from instruments_api.core.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run("instruments_api.main:app", host=settings.HOST, port=settings.PORT, log_config=None)
