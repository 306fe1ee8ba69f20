"""Configuration loaded from environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env: try package dir then project root
_base = Path(__file__).resolve().parent
for _env_path in (_base / ".env", _base.parent / ".env"):
    if load_dotenv(_env_path):
        break
load_dotenv()  # also allow process env

# Remote profile service
PROFILE_API_BASE_URL: str = os.getenv("PROFILE_API_BASE_URL", "http://localhost:8080")
PROFILE_API_TOKEN: str = os.getenv("PROFILE_API_TOKEN", "")

# HTTP / fetch settings
HTTP_TIMEOUT_SECONDS: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30.0"))
HTTP_MAX_RETRIES: int = int(os.getenv("HTTP_MAX_RETRIES", "3"))
HTTP_RETRY_BACKOFF_SECONDS: float = float(os.getenv("HTTP_RETRY_BACKOFF_SECONDS", "1.0"))

# Local draft cache
PROFILE_CACHE_KEY: str = os.getenv("PROFILE_CACHE_KEY", "employeeProfile")
PROFILE_CACHE_PATH: Path = Path(
    os.getenv("PROFILE_CACHE_PATH", str(_base.parent / "data" / "profile_cache.json"))
)

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Seed values for a profile that does not exist yet
DEFAULT_COUNTRY: str = "United States"
DEFAULT_EMPLOYEE_TYPE: str = "Full-time"
DEFAULT_DEPARTMENT: str = "Engineering"
DEFAULT_INDUSTRY: str = "Technology"
DEFAULT_INDUSTRY_YEARS: float = 1.0
DEFAULT_EXPERIENCE_LEVEL: str = "Mid-level (2-5 years)"
