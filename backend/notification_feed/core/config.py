from pydantic_settings import BaseSettings
from pydantic import Field
from typing import List, Optional
from pathlib import Path

class Settings(BaseSettings):
    app_name: str = Field(default="Notification Feed API", alias="APP_NAME")
    env: str = Field(default="dev", alias="ENV")
    database_url: str | None = Field(default=None, alias="DATABASE_URL")
    # Optional read replica; feed reads prefer it when set
    database_replica_url: str | None = Field(default=None, alias="DATABASE_REPLICA_URL")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    feed_page_size: int = Field(default=10, alias="FEED_PAGE_SIZE")
    activity_graph_days: int = Field(default=30, alias="ACTIVITY_GRAPH_DAYS")
    auto_apply_migrations: bool = Field(default=True, alias="AUTO_APPLY_MIGRATIONS")
    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=8000, alias="PORT")
    # Raw env value (string), parsed to a list via property to avoid JSON decoding errors
    cors_origins_raw: Optional[str] = Field(default=None, alias="CORS_ORIGINS", description="Comma separated list of allowed CORS origins")

    class Config:
        # Load env from backend/.env regardless of CWD
        env_file = str(Path(__file__).resolve().parents[2] / ".env")
        case_sensitive = False

    def _parse_list(self, v: Optional[str]) -> List[str]:
        if v is None:
            return []
        s = v.strip()
        if not s:
            return []
        if s.startswith("[") and s.endswith("]"):
            import json
            try:
                loaded = json.loads(s)
            except ValueError:
                loaded = None
            if isinstance(loaded, list):
                return [str(e).strip() for e in loaded if str(e).strip()]
        return [e.strip() for e in s.split(",") if e.strip()]

    @property
    def cors_origins(self) -> List[str]:
        items = self._parse_list(self.cors_origins_raw)
        # Fallback dev defaults if none provided
        if not items:
            return ["http://localhost:5173", "http://127.0.0.1:5173"]
        # Dev convenience: ensure both localhost and 127.0.0.1 variants for same ports
        augmented = set(items)
        for origin in list(items):
            if origin.startswith("http://localhost:"):
                port = origin.rsplit(":", 1)[1]
                augmented.add(f"http://127.0.0.1:{port}")
            if origin.startswith("http://127.0.0.1:"):
                port = origin.rsplit(":", 1)[1]
                augmented.add(f"http://localhost:{port}")
        return list(augmented)

    @property
    def is_dev(self) -> bool:
        return self.env.lower() in {"dev", "development"}

settings = Settings()  # type: ignore
