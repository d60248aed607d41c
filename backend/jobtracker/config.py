from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_dir: Path = Path.home() / "JobTracker"
    session_ttl_seconds: int = 86400  # 24 hours
    ghosting_threshold_days: int = 14
    default_tag_color: str = "#3b82f6"
    api_prefix: str = "/api"
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    cors_origins: list[str] = [
        "http://127.0.0.1:3000",
        "http://localhost:3000",
    ]

    @property
    def db_path(self) -> Path:
        return self.data_dir / "tracker.sqlite"

    model_config = {"env_prefix": "JOBTRACKER_"}


settings = Settings()
