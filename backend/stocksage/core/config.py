from pathlib import Path

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings

BACKEND_DIR = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    app_name: str = "StockSage AI"
    debug: bool = False

    # Paths
    data_dir: Path = BACKEND_DIR / "data"
    # Default to files under data_dir when unset
    db_path: Path | None = None
    credential_file: Path | None = None

    # Sharing
    share_store: str = "memory"  # memory | sqlite
    share_ttl_days: int = 30  # 0 disables expiry
    share_default_title: str = "StockSage AI Conversation"
    # Deployment host hint (e.g. set by Vercel); falls back to the request origin
    public_host: str = Field(
        default="",
        validation_alias=AliasChoices("STOCKSAGE_PUBLIC_HOST", "VERCEL_URL"),
    )

    # LLM
    llm_provider: str = "gemini"
    llm_model: str = "gemini-2.0-flash"
    llm_max_output_tokens: int = 1000
    llm_temperature: float = 0.7
    llm_timeout_seconds: float = 60.0

    # Client
    server_url: str = "http://127.0.0.1:8000"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = ["*"]

    model_config = {
        "env_file": str(BACKEND_DIR / ".env"),
        "env_prefix": "STOCKSAGE_",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @model_validator(mode="after")
    def _derive_paths(self) -> "Settings":
        if self.db_path is None:
            self.db_path = self.data_dir / "stocksage.db"
        if self.credential_file is None:
            self.credential_file = self.data_dir / "credentials.json"
        return self

    @property
    def share_expires_in(self) -> str:
        """Human-readable share lifetime advertised to clients."""
        if self.share_ttl_days <= 0:
            return "never"
        unit = "day" if self.share_ttl_days == 1 else "days"
        return f"{self.share_ttl_days} {unit}"


settings = Settings()
