import os
import tempfile
from dotenv import load_dotenv

load_dotenv()

# API Keys
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")

# Value shipped in .env.example; treated the same as a missing key
GEMINI_API_KEY_PLACEHOLDER = "your_gemini_api_key_here"

# Gemini generateContent endpoint
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
GEMINI_API_BASE_URL = os.getenv("GEMINI_API_BASE_URL", "https://generativelanguage.googleapis.com/v1beta")
GEMINI_TIMEOUT_SECONDS = float(os.getenv("GEMINI_TIMEOUT_SECONDS", "30"))
GEMINI_MAX_RETRIES = int(os.getenv("GEMINI_MAX_RETRIES", "1"))

# Uploads are written here only for the duration of text extraction
UPLOAD_DIR = os.getenv("UPLOAD_DIR", os.path.join(tempfile.gettempdir(), "pdfquiz-uploads"))

# General Config
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
FRONTEND_BUILD_DIR = os.getenv("FRONTEND_BUILD_DIR", os.path.join("frontend", "build"))
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def is_api_key_configured(api_key) -> bool:
    """A key counts as configured only when it is non-blank and not the placeholder."""
    if not api_key or not api_key.strip():
        return False
    return api_key.strip() != GEMINI_API_KEY_PLACEHOLDER
