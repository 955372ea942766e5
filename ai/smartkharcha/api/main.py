"""FastAPI application main module."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from smartkharcha.api.deps import get_knowledge_base
from smartkharcha.api.limiter import limiter
from smartkharcha.api.routes_admin import router as admin_router
from smartkharcha.api.routes_chat import router as chat_router
from smartkharcha.api.routes_documents import router as documents_router
from smartkharcha.api.routes_tax import router as tax_router
from smartkharcha.core.logging import setup_logging
from smartkharcha.core.schemas import FieldError, ValidationErrorResponse

VERSION = "0.1.0"

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown."""
    logger.info("Starting SmartKharcha advisory API")
    kb = get_knowledge_base()
    logger.info(f"Knowledge base ready: {len(kb)} documents")
    yield
    logger.info("Shutting down SmartKharcha advisory API")


# Create FastAPI app
app = FastAPI(
    title="SmartKharcha Advisory API",
    description="Profile-aware insurance and tax advice grounded in a curated knowledge base",
    version=VERSION,
    lifespan=lifespan,
)

# Add rate limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Return field-level validation errors."""
    errors = [
        FieldError(
            field=".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            message=err.get("msg", "Invalid value"),
        )
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content=ValidationErrorResponse(errors=errors).model_dump(),
    )


# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(chat_router, prefix="/v1", tags=["chat"])
app.include_router(tax_router, prefix="/v1/tax", tags=["tax"])
app.include_router(documents_router, prefix="/v1/documents", tags=["documents"])
app.include_router(admin_router, prefix="/admin", tags=["admin"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": VERSION}


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "SmartKharcha Advisory API",
        "version": VERSION,
        "docs": "/docs",
        "health": "/health",
    }
