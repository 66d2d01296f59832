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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./password_reset.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    PASSWORD_RESET_TIME_LIMIT_MINUTES = data.get("PASSWORD_RESET_TIME_LIMIT_MINUTES", 15)
    PASSWORD_RESET_REDIRECT_URL = data.get("PASSWORD_RESET_REDIRECT_URL", "/")
    PASSWORD_RESET_URL_BASE = data.get("PASSWORD_RESET_URL_BASE", "http://localhost:8000")
    USER_ID_PARAMETER = data.get("USER_ID_PARAMETER", "user_id")
    MAIL_FROM = data.get("MAIL_FROM", "reply@example.com")
    MAIL_DEVELOPMENT_MODE = bool(data.get("MAIL_DEVELOPMENT_MODE", True))
    AWS_REGION = data.get("AWS_REGION", "us-east-1")
