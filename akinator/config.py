"""Configuration management for the Akinator client and server."""

import os
from pathlib import Path

from dotenv import load_dotenv

# config.py is in akinator/, .env is in project root
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path, override=True)


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/127.0.0.0 Safari/537.36"
)


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Config:
    """Application configuration from environment variables."""

    # Game defaults
    LANGUAGE: str = os.getenv("AKINATOR_LANGUAGE", "en").strip().lower()
    CHILD_MODE: bool = _env_bool("AKINATOR_CHILD_MODE")

    # Session cache
    CACHE_DIR: str = os.getenv("AKINATOR_CACHE_DIR", str(Path.cwd() / "cache"))
    SESSION_TTL_MS: int = int(os.getenv("AKINATOR_SESSION_TTL_MS", "600000"))  # 10 minutes

    # Remote service
    TIMEOUT: float = float(os.getenv("AKINATOR_TIMEOUT", "15"))
    USER_AGENT: str = os.getenv("AKINATOR_USER_AGENT", DEFAULT_USER_AGENT)

    # HTTP server
    HOST: str = os.getenv("AKINATOR_HOST", "127.0.0.1")
    PORT: int = int(os.getenv("AKINATOR_PORT", "8010"))
    LOG_LEVEL: str = os.getenv("AKINATOR_LOG_LEVEL", "INFO").upper()

    @classmethod
    def validate(cls) -> list[str]:
        """Validate configuration and return list of problems found."""
        from akinator.models import Language

        problems = []

        if cls.LANGUAGE not in {lang.value for lang in Language}:
            problems.append(f"AKINATOR_LANGUAGE '{cls.LANGUAGE}' is not a supported language")
        if cls.SESSION_TTL_MS <= 0:
            problems.append("AKINATOR_SESSION_TTL_MS must be positive")
        if cls.TIMEOUT <= 0:
            problems.append("AKINATOR_TIMEOUT must be positive")

        return problems
