import os
from pathlib import Path
from dotenv import load_dotenv

# Base directory resolution (app -> project root)
BASE_DIR = Path(__file__).resolve().parent.parent


def env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean environment variable ("1", "true", "yes", "on")."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_cors_origins() -> list[str]:
    """Return the CORS allow list from the comma-separated CORS_ORIGINS."""
    return [origin.strip() for origin in CORS_ORIGINS.split(",") if origin.strip()]


# Load environment variables from .env in the project root
env_path = BASE_DIR / ".env"
load_dotenv(dotenv_path=env_path if env_path.exists() else None)

# Service metadata
SERVICE_NAME = "Health Analyzer Backend"
SERVICE_VERSION = os.getenv("SERVICE_VERSION", "1.0.0")

# Server configuration
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 5000))
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Upload limits (5 MB)
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", 5 * 1024 * 1024))

# USDA FoodData Central configuration
USDA_API_KEY = os.getenv("USDA_API_KEY")
USDA_API_URL = os.getenv(
    "USDA_API_URL", "https://api.nal.usda.gov/fdc/v1/foods/search"
)
USDA_TIMEOUT_SECONDS = float(os.getenv("USDA_TIMEOUT_SECONDS", 10))

# OCR configuration
OCR_LANG = os.getenv("OCR_LANG", "en")
OCR_USE_ANGLE_CLS = env_flag("OCR_USE_ANGLE_CLS", True)
