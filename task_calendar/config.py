import os

from dotenv import load_dotenv

# Load .env from the project root so local development settings are picked up
load_dotenv()

_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # "sqlite" for the persistent store, "memory" for a throwaway one
    TASK_STORE = os.environ.get("TASK_STORE", "sqlite")
    DATABASE_PATH = os.environ.get("DATABASE_PATH", os.path.join(_PROJECT_ROOT, "tasks.db"))

    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    HOST = os.environ.get("HOST", "127.0.0.1")
    PORT = int(os.environ.get("PORT", "3002"))
    DEBUG = os.environ.get("FLASK_DEBUG", "0") == "1"
    JSON_SORT_KEYS = False

    API_BASE_URL = os.environ.get("API_BASE_URL", f"http://localhost:{PORT}/api")


class TestConfig(Config):
    TESTING = True
    DEBUG = False
    TASK_STORE = "memory"
    LOG_LEVEL = "WARNING"
