import os


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


DATABASE_URL = os.getenv("SIGNAGE_DATABASE_URL", "sqlite:///./signage.db").strip()
SERVER_HOST = os.getenv("SIGNAGE_SERVER_HOST", "0.0.0.0").strip()
SERVER_PORT = int(os.getenv("SIGNAGE_SERVER_PORT", "3000"))
LOG_LEVEL = os.getenv("SIGNAGE_LOG_LEVEL", "INFO").strip().upper() or "INFO"
QUIET_ACCESS_LOG = _env_flag("SIGNAGE_QUIET_ACCESS_LOG", "1")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("SIGNAGE_CORS_ORIGINS", "*").split(",")
    if origin.strip()
] or ["*"]
STATIC_DIR = os.getenv("SIGNAGE_STATIC_DIR", "public").strip()

# Pairing codes are short-lived; 15 minutes unless overridden.
PAIRING_CODE_TTL_SEC = int(os.getenv("SIGNAGE_PAIRING_CODE_TTL_SEC", str(15 * 60)))
PAIRING_CODE_MAX_DRAWS = 10
