from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    env: str = "dev"
    database_url: str = "sqlite:///./f1hub.db"
    ergast_url: str = "https://api.jolpi.ca/ergast/f1"
    season: int = 2026
    fetch_timeout: float = 10.0
    sync_hour_utc: int = 6

    gemini_api_key: Optional[str] = None
    gemini_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_model: str = "gemini-2.5-flash"
    model_timeout: float = 60.0

    identity_api_key: Optional[str] = None
    identity_url: str = "https://identitytoolkit.googleapis.com/v1"

    allowed_origins: List[str] = [
        "https://f1-2026-hub.web.app",
        "https://f1-2026-hub.firebaseapp.com",
        "http://localhost:5173",
    ]
    chat_max_sources: int = 5
    chat_max_turns: int = 40
    memory_max_messages: int = 20

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = ""
        case_sensitive = False
