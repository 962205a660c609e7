import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


def _get(key, default=None):
    """Environment variables win over env.yaml; values are YAML-parsed."""
    if key in os.environ:
        return yaml.safe_load(os.environ[key])
    return data.get(key, default)


class ApplicationConfig:
    APP_ENV = _get("APP_ENV", "development")
    DB_URI = _get("DB_URI", "sqlite+aiosqlite:///./app.db")
    API_PREFIX = _get("API_PREFIX", "/api")
    API_PORT = _get("API_PORT", 4000)
    API_HOST = _get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = _get("CORS_ORIGINS", ["http://localhost:4173"])
    CORS_ALLOW_CREDENTIALS = _get("CORS_ALLOW_CREDENTIALS", True)
    CLIENT_URL = _get("CLIENT_URL", "http://localhost:4173")
    LOG_LEVEL = _get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(_get("ENABLE_LOGGING_MIDDLEWARE", 1))

    JWT_SECRET = _get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_EXPIRES_DAYS = int(_get("JWT_EXPIRES_DAYS", 90))

    # Skips verification gating and lets dev flows run without real delivery
    RELAXED_MODE = bool(_get("RELAXED_MODE", False))

    IDENTITY_PROVIDER = _get("IDENTITY_PROVIDER", "fake")
    FIREBASE_CREDENTIALS_FILE = _get("FIREBASE_CREDENTIALS_FILE", "")
    FIREBASE_API_KEY = _get("FIREBASE_API_KEY", "")
    DEV_OTP_CODE = str(_get("DEV_OTP_CODE", "123456"))

    IMAGE_STORE = _get("IMAGE_STORE", "memory")
    CLOUDINARY_CLOUD_NAME = _get("CLOUDINARY_CLOUD_NAME", "")
    CLOUDINARY_API_KEY = _get("CLOUDINARY_API_KEY", "")
    CLOUDINARY_API_SECRET = _get("CLOUDINARY_API_SECRET", "")

    EMAIL_BACKEND = _get("EMAIL_BACKEND", "console")
    SMTP_HOST = _get("SMTP_HOST", "localhost")
    SMTP_PORT = int(_get("SMTP_PORT", 587))
    SMTP_USERNAME = _get("SMTP_USERNAME", "")
    SMTP_PASSWORD = _get("SMTP_PASSWORD", "")
    EMAIL_FROM = _get("EMAIL_FROM", "Jobpilot <no-reply@jobpilot.local>")

    RATE_LIMIT_ENABLED = bool(_get("RATE_LIMIT_ENABLED", True))
    RATE_LIMIT_WINDOW_SECONDS = int(_get("RATE_LIMIT_WINDOW_SECONDS", 15 * 60))
    RATE_LIMIT_MAX_REQUESTS = int(_get("RATE_LIMIT_MAX_REQUESTS", 100))
    LOGIN_RATE_LIMIT_MAX_ATTEMPTS = int(_get("LOGIN_RATE_LIMIT_MAX_ATTEMPTS", 5))

    REQUEST_TIMEOUT_SECONDS = int(_get("REQUEST_TIMEOUT_SECONDS", 300))
    MAX_UPLOAD_BYTES = int(_get("MAX_UPLOAD_BYTES", 5 * 1024 * 1024))
