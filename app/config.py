import os
from dotenv import load_dotenv

load_dotenv()

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
MATCH_MODES = ("contained", "overlap")


class Settings:
    """Application settings, read from the environment (and .env)."""
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./marketplace.db")

    # Auth
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-production")
    ALGORITHM = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))

    # CORS allowlist (comma-separated origins)
    CORS_ALLOWED_ORIGINS = [
        origin.strip()
        for origin in os.getenv(
            "CORS_ALLOWED_ORIGINS", "http://localhost,http://localhost:3000"
        ).split(",")
        if origin.strip()
    ]

    # Calendar: first day of the displayed week, and how an availability
    # window is matched against it ("contained" or "overlap")
    WEEK_START = os.getenv("WEEK_START", "monday").strip().lower()
    AVAILABILITY_MATCH = os.getenv("AVAILABILITY_MATCH", "contained").strip().lower()

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE = os.getenv("LOG_FILE")

    @classmethod
    def week_start_index(cls) -> int:
        if cls.WEEK_START not in WEEKDAYS:
            raise ValueError(f"Invalid WEEK_START: {cls.WEEK_START}")
        return WEEKDAYS.index(cls.WEEK_START)

    @classmethod
    def validate(cls):
        """Raise ValueError when WEEK_START or AVAILABILITY_MATCH is unusable."""
        cls.week_start_index()
        if cls.AVAILABILITY_MATCH not in MATCH_MODES:
            raise ValueError(f"Invalid AVAILABILITY_MATCH: {cls.AVAILABILITY_MATCH}")


settings = Settings()
