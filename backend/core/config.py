from pydantic_settings import BaseSettings
from typing import List, Optional
from pydantic import Field
import os
import json



class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./cuidador.db"

    # Seed the built-in dataset when the store is empty or unreadable
    SEED_DEFAULT_DATA: bool = True

    # LLM / Assistant settings
    LLM_PROVIDER: str = "gemini"
    LLM_API_URL: Optional[str] = None
    LLM_API_KEY: Optional[str] = None
    LLM_MODEL: Optional[str] = None
    LLM_MAX_TOKENS: int = 1024
    LLM_TEMPERATURE: float = 0.4
    LLM_TIMEOUT_SECONDS: int = 60

    ALLOWED_ORIGINS: List[str] = Field(default_factory=list)

    class Config:
        env_file = ".env"


settings = Settings()

raw_allowed = os.getenv("ALLOWED_ORIGINS")
if raw_allowed:
    try:
        parsed = json.loads(raw_allowed)
        if isinstance(parsed, list):
            settings.ALLOWED_ORIGINS = parsed
    except Exception:
        settings.ALLOWED_ORIGINS = [s.strip() for s in raw_allowed.split(',') if s.strip()]
