import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .dependencies import get_app_settings, get_credential_resolver
from .exceptions import RelayError
from .expenses.router import router as expenses_router
from .integrations.google.oauth_router import router as google_oauth_router
from .uploads.router import router as upload_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Try to authorize the Sheets client once at startup."""
    resolver_factory = app.dependency_overrides.get(
        get_credential_resolver, get_credential_resolver
    )
    try:
        client = await resolver_factory().get_client()
        logger.info(f"Google Sheets client ready ({client.auth_kind})")
    except RelayError as e:
        logger.warning(f"Sheets client not ready at startup: {e}")
    yield


app = FastAPI(title="Receipt Relay", version="0.1.0", lifespan=lifespan)

settings = get_app_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(upload_router)
app.include_router(expenses_router)
app.include_router(google_oauth_router)


@app.exception_handler(RelayError)
async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    """Convert relay errors into JSON error bodies."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})


@app.get("/auth-success")
async def auth_success():
    """OAuth authentication success page."""
    return {"message": "Google authentication successful! You can close this window."}


@app.get("/health")
async def health():
    return {"status": "ok"}


# Mount static files last so API routes take precedence
if settings.static_dir.is_dir():
    app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")


def main():
    """Main entry point for the web server."""
    settings = get_app_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info("Starting Receipt Relay Web Server")
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
