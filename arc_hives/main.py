"""FastAPI application entry point."""

import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from arc_hives.config import settings
from arc_hives.errors import ArcHivesError, ValidationError
from arc_hives.routes import articles, certificates, comments

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Arc-Hives",
    description="Article publishing with content fingerprints and certificates of authorship",
    version="0.1.0",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# Include routers
app.include_router(articles.router)
app.include_router(articles.legacy_router)
app.include_router(comments.router)
app.include_router(certificates.router)


def _error_response(error: ArcHivesError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content={"success": False, "error": error.to_dict()},
    )


@app.exception_handler(ArcHivesError)
async def arc_hives_error_handler(request: Request, exc: ArcHivesError):
    """Map service errors to structured responses."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed in {exc.operation}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected ({exc.kind}): {exc.message}")
    return _error_response(exc)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Report missing or malformed request fields as validation errors."""
    fields = ", ".join(".".join(str(p) for p in err["loc"] if p != "body") for err in exc.errors())
    return _error_response(ValidationError(f"Invalid or missing fields: {fields}"))


@app.on_event("startup")
def startup_event():
    """Wait for the database and create any missing tables."""
    from arc_hives.database import Base, engine, wait_for_database
    import arc_hives.models  # noqa: F401  registers the tables

    logger.info("Starting application...")
    wait_for_database()
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "healthy"}


# Serve uploaded article files
os.makedirs(settings.FILE_STORAGE_DIR, exist_ok=True)
app.mount("/files", StaticFiles(directory=settings.FILE_STORAGE_DIR), name="files")


def run():
    """Run the API with uvicorn on the configured port."""
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()
