"""
MoneyMigo FastAPI Application
"""

import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from moneymigo.config import settings
from moneymigo.api.router import api_router
from moneymigo.core.database import async_session, init_db, close_db
from moneymigo.core.logging import configure_logging
from moneymigo.services.payment_type_service import PaymentTypeService
import moneymigo.models

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Personal finance tracker: transactions, payment types and investments",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
app.include_router(api_router, prefix=settings.API_PREFIX)

def _validation_message(exc: RequestValidationError) -> str:
    """Human readable text for the first failing field"""
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    message = first.get("msg", "Invalid value")
    if location:
        return f"{'.'.join(location)}: {message}"
    return message

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None)
    )

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": _validation_message(exc)})

@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})

@app.on_event("startup")
async def startup_event():
    """Initialize on startup"""
    configure_logging()
    logger.info("Starting %s v%s", settings.PROJECT_NAME, settings.VERSION)

    # Create database tables
    await init_db()
    logger.info("Database initialized")

    if settings.SEED_DEFAULT_PAYMENT_TYPES:
        async with async_session() as session:
            added = await PaymentTypeService(session).seed_defaults()
        logger.info("Seeded %d default payment types", added)

@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("Shutting down...")
    await close_db()

@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "MoneyMigo API",
        "version": settings.VERSION,
        "docs": "/docs",
        "health": f"{settings.API_PREFIX}/health"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "moneymigo.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=True
    )
