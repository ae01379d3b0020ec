# 📦 main.py

from fastapi import FastAPI
from prometheus_client import start_http_server
import structlog

from api import handlers
from config import settings
from utils.fetch_houses import load_houses

log = structlog.get_logger()

# ─────────────────────────────
# API Setup
app = FastAPI(title=settings.app_name, version=settings.version)
app.include_router(handlers.router)

# ─────────────────────────────
# Startup event
@app.on_event("startup")
async def startup_event():
    if settings.prometheus_port:
        start_http_server(settings.prometheus_port)

    if not settings.houses_path:
        log.warning("HOUSES_PATH not set, starting with an empty directory")
        return

    try:
        handlers.set_houses(load_houses(settings.houses_path))
    except (FileNotFoundError, ValueError) as e:
        log.warning("Could not load houses", error=str(e))

# ─────────────────────────────
# Main entrypoint
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
    )
