"""
FastAPI application for the YouTube study notes service.
"""

import time
import traceback
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import config
from app.api.routes import router
from app.core.assembler import error_response
from app.db.database import init_db
from app.utils.error_handling import InvalidRequestError, NotesError
from app.utils.logger import logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize the transcript cache table before serving requests."""
    init_db()
    logging.info("Transcript cache table ready")
    yield


# FastAPI application
app = FastAPI(
    title=config.APP_NAME,
    version=config.APP_VERSION,
    description="An API for turning YouTube videos into structured study notes",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Middleware to add processing time header to responses."""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies get a BAD_REQUEST envelope."""
    logging.warning(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
    error = InvalidRequestError("Invalid request body")
    return JSONResponse(status_code=200, content=error_response(error))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled exceptions."""
    logging.error(f"Unhandled error on {request.url.path}: {str(exc)}")
    logging.error(traceback.format_exc())
    return JSONResponse(
        status_code=200,
        content=error_response(NotesError(debug={"exception": type(exc).__name__})),
    )


# Include API router
app.include_router(router)


# Root
@app.get("/")
async def root():
    """Root endpoint returning basic API information."""
    return {
        "name": config.APP_NAME,
        "version": config.APP_VERSION,
        "description": "YouTube study notes API",
    }
