import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file)
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./test.db")
    DB_AUTO_CREATE = bool(data.get("DB_AUTO_CREATE", True))
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")

    # Grants, sessions and refresh tokens
    REFRESH_TOKEN_SECRET = data.get(
        "REFRESH_TOKEN_SECRET", "dev-refresh-secret-change-in-production"
    )
    GRANT_TTL_MINUTES = data.get("GRANT_TTL_MINUTES", 15)
    SESSION_CEILING_HOURS = data.get("SESSION_CEILING_HOURS", 24)
    MAX_REFRESH_COUNT = data.get("MAX_REFRESH_COUNT", 100)
    REFRESH_TOKEN_TTL_HOURS = data.get("REFRESH_TOKEN_TTL_HOURS", 24)
    BACKEND_TIMEOUT_SECONDS = data.get("BACKEND_TIMEOUT_SECONDS", 5)

    # External collaborators
    TIER_AUTHORITY_URL = data.get("TIER_AUTHORITY_URL", "http://localhost:8001")
    TIER_AUTHORITY_API_KEY = data.get("TIER_AUTHORITY_API_KEY", "")
    S3_BUCKET = data.get("S3_BUCKET", "media-assets")
    S3_REGION = data.get("S3_REGION", "us-east-1")
    ASSET_KEY_TEMPLATE = data.get("ASSET_KEY_TEMPLATE", "videos/{asset_id}.mp4")

    # Analytics and maintenance
    ANALYTICS_WINDOW_HOURS = data.get("ANALYTICS_WINDOW_HOURS", 24 * 30)
    ANALYTICS_MAX_ENTRIES = data.get("ANALYTICS_MAX_ENTRIES", 1000)
    PURGE_INTERVAL_SECONDS = data.get("PURGE_INTERVAL_SECONDS", 0)
