from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from core.config import settings
from core.database import create_db_and_tables
from core.exceptions import SwiftCodeServiceError
from core.logger import get_logger
from routers import swift_codes

logger = get_logger(__name__)

MISSING_ERROR_TYPES = {"missing", "string_too_short"}

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    create_db_and_tables()
    logger.info("Application started")
    yield
    # Shutdown
    logger.info("Application shutting down")

app = FastAPI(title="SWIFT Code Service", lifespan=lifespan)

@app.exception_handler(SwiftCodeServiceError)
async def service_exception_handler(request: Request, exc: SwiftCodeServiceError):
    if exc.status_code >= 500:
        logger.error(f"Store failure on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"message": "Internal Server Error"})
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = first.get("loc", ())
    field = loc[-1] if len(loc) > 1 else None

    if field is None or isinstance(field, int):
        message = "Invalid request body"
    elif first.get("type") in MISSING_ERROR_TYPES:
        message = f"Missing required field: {field}"
    else:
        message = f"Invalid value for field: {field}"
    return JSONResponse(status_code=400, content={"message": message})

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"message": "Internal Server Error"},
    )

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(swift_codes.router)
