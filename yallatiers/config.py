# config.py
import os


def _float_or_none(v):
    if v is None or v == "":
        return None
    try:
        return float(v)
    except ValueError:
        return None


class Config:
    # Database
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///yallatiers.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Sessions
    SECRET_KEY = os.getenv("SECRET_KEY", "dev")
    SESSION_COOKIE_SAMESITE = "Lax"
    JWT_SECRET = os.getenv("JWT_SECRET", "devsecret")
    JWT_ALGO = "HS256"
    JWT_TTL_HOURS = int(os.getenv("JWT_TTL_HOURS", "6"))

    # AI completion (OpenRouter speaks the OpenAI chat-completions API)
    OPENROUTER_API_KEY = os.getenv("OPENROUTER_API_KEY")
    OPENROUTER_MODEL = os.getenv("OPENROUTER_MODEL", "gpt-3.5-turbo")
    OPENROUTER_BASE_URL = os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1")
    OPENROUTER_TIMEOUT = _float_or_none(os.getenv("OPENROUTER_TIMEOUT"))
    APP_REFERER = os.getenv("APP_REFERER", "https://yallatiers.com")
    APP_TITLE = os.getenv("APP_TITLE", "Yalla Tiers")

    # Vehicle data (NHTSA vPIC)
    VPIC_BASE_URL = os.getenv("VPIC_BASE_URL", "https://vpic.nhtsa.dot.gov/api/vehicles")
    VPIC_TIMEOUT = float(os.getenv("VPIC_TIMEOUT", "10"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    OPENROUTER_API_KEY = None
    JWT_SECRET = "test-secret-with-enough-bytes-for-hs256"
