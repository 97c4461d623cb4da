from __future__ import annotations
import uuid
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from captionboard.config import settings
from captionboard.errors import install_error_handlers
from captionboard.logging_setup import configure_logging
from captionboard.routes.system import router as system_router
from captionboard.routes.captions import router as captions_router
from captionboard.routes.votes import router as votes_router
from captionboard.routes.analytics import router as analytics_router
from captionboard.routes.upload import router as upload_router
from captionboard.routes.images import router as images_router
from captionboard.routes.dashboard import router as dashboard_router
import structlog

configure_logging()
log = structlog.get_logger()

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    log.info("startup", env=settings.environment, version=settings.app_version, git_sha=settings.git_sha)
    yield
    # Shutdown
    log.info("shutdown")

app = FastAPI(
    title=f"{settings.app_display_name} API",
    version=settings.app_version,
    lifespan=lifespan,
    description=f"{settings.app_display_name} API for AI image captions, voting and analytics"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.environment == "dev" else settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)

# Include routers
app.include_router(system_router)
app.include_router(captions_router)
app.include_router(votes_router)
app.include_router(analytics_router)
app.include_router(upload_router)
app.include_router(images_router)
app.include_router(dashboard_router)

@app.middleware("http")
async def add_request_id(request: Request, call_next):
    rid = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = rid
    structlog.contextvars.bind_contextvars(request_id=rid)
    try:
        response: Response = await call_next(request)
    finally:
        structlog.contextvars.clear_contextvars()
    response.headers["X-Request-ID"] = rid
    return response

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("captionboard.main:app", host=settings.api_host, port=settings.api_port)
