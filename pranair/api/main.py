"""FastAPI application bootstrap."""
from __future__ import annotations

from fastapi import FastAPI

from .core.config import check_credentials, get_settings
from .core.errors import register_error_handlers
from .core.logging import register_middleware, setup_logging
from .core.security import enable_cors
from .routers import distress, health, triage, vitals

settings = get_settings()
setup_logging(settings.log_level.upper())
check_credentials(settings)

app = FastAPI(title="PranAIR API", version="0.1.0")

register_middleware(app)
enable_cors(app)
register_error_handlers(app)

app.include_router(health.router)
app.include_router(distress.router)
app.include_router(vitals.router)
app.include_router(triage.router)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "PranAIR API", "health": "/health"}
