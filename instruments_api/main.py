from prometheus_fastapi_instrumentator import Instrumentator

from instruments_api import create_app
from instruments_api.core.config import get_settings
from instruments_api.core.logging import configure_logging

settings = get_settings()
configure_logging(settings.LOG_LEVEL, service=settings.APP_NAME)
app = create_app(settings)
# Middleware has to be in place before the first request builds the stack.
instrumentator = Instrumentator().instrument(app)
instrumentator.expose(app, include_in_schema=False)


@app.get("/health")
async def health() -> dict[str, bool]:
    return {"ok": True}
