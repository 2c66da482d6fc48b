"""
PDF Quiz Generator - Main Application

FastAPI application that turns an uploaded PDF into a quiz:

- Upload a PDF and extract its text (PyMuPDF)
- Generate multiple-choice, true/false and fill-in-the-blank questions (Gemini)
- Report whether the Gemini API key is configured
- Serve the built frontend in production
"""

import logging
import os

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from pdfquiz import config
from pdfquiz.config import is_api_key_configured
from pdfquiz.errors import QuizPipelineError
from pdfquiz.routes import quiz

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="PDF Quiz Generator",
    description="Upload a PDF, extract its text and generate a quiz from it with Gemini.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(QuizPipelineError)
async def quiz_pipeline_error_handler(request: Request, exc: QuizPipelineError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid request body"})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": QuizPipelineError.message})


@app.on_event("startup")
async def startup_event():
    """Application startup event"""
    logger.info("🚀 [STARTUP] PDF Quiz Generator starting...")
    if is_api_key_configured(config.GEMINI_API_KEY):
        logger.info(f"🔑 [STARTUP] GEMINI_API_KEY configured, model {config.GEMINI_MODEL}")
    else:
        logger.warning("❌ [STARTUP] GEMINI_API_KEY not configured; quiz generation will fail until it is set")
    os.makedirs(config.UPLOAD_DIR, exist_ok=True)


app.include_router(quiz.router, prefix="/api", tags=["PDF Quiz"])


@app.get("/health")
async def root_health_check():
    """Root health check endpoint"""
    return {
        "status": "healthy",
        "service": "pdf_quiz_generator",
        "version": "1.0.0",
    }


def mount_frontend(application: FastAPI, build_dir: str):
    """Serve the built single-page app, falling back to index.html for client-side routes."""
    build_root = os.path.realpath(build_dir)
    index_file = os.path.join(build_dir, "index.html")
    static_dir = os.path.join(build_dir, "static")
    if os.path.isdir(static_dir):
        application.mount("/static", StaticFiles(directory=static_dir), name="static")

    @application.get("/{full_path:path}", include_in_schema=False)
    async def serve_frontend(full_path: str):
        if full_path.startswith("api/"):
            return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "Not found"})
        candidate = os.path.realpath(os.path.join(build_root, full_path))
        if full_path and os.path.commonpath([build_root, candidate]) == build_root and os.path.isfile(candidate):
            return FileResponse(candidate)
        return FileResponse(index_file)


if config.ENVIRONMENT == "production":
    if os.path.isfile(os.path.join(config.FRONTEND_BUILD_DIR, "index.html")):
        mount_frontend(app, config.FRONTEND_BUILD_DIR)
    else:
        logger.warning(f"Frontend build not found in {config.FRONTEND_BUILD_DIR}; serving the API only")


def run():
    uvicorn.run("pdfquiz.main:app", host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
