from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./houseguide.db"
    TEST_DATABASE_URL: str = "sqlite+aiosqlite:///./test.db"

    # anthropic, ollama or none
    AI_PROVIDER: str = "anthropic"
    ANTHROPIC_API_KEY: str = ""
    ANTHROPIC_MODEL: str = "claude-sonnet-4-20250514"
    OLLAMA_BASE_URL: str = "http://localhost:11434"
    OLLAMA_MODEL: str = "llama3.1:8b-instruct"
    LLM_TIMEOUT_SECONDS: float = 30.0

    DB_ECHO: bool = False

    # Classification gates
    MIN_CLASSIFY_CHARS: int = 10
    MIN_CLASSIFY_CONFIDENCE: float = 0.6
    MIN_SEGMENT_CHARS: int = 11
    MIN_SEGMENT_CONFIDENCE: float = 0.6

    # Weekly report fallback
    NOTE_EXCERPT_CHARS: int = 100

    CORS_ORIGINS: str = "http://localhost:5173"

    model_config = {"env_file": ".env", "extra": "ignore"}

    @model_validator(mode="after")
    def _fix_database_url(self):
        """Render provides postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if self.DATABASE_URL.startswith("postgresql://"):
            self.DATABASE_URL = self.DATABASE_URL.replace(
                "postgresql://", "postgresql+asyncpg://", 1,
            )
        return self

    @model_validator(mode="after")
    def _clamp_confidences(self):
        self.MIN_CLASSIFY_CONFIDENCE = min(1.0, max(0.0, self.MIN_CLASSIFY_CONFIDENCE))
        self.MIN_SEGMENT_CONFIDENCE = min(1.0, max(0.0, self.MIN_SEGMENT_CONFIDENCE))
        return self


settings = Settings()
