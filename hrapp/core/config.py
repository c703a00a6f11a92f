# hrapp/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parents[1]

class Settings(BaseSettings):
    APP_NAME: str = "HR Records"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "Employee records and timesheets."
    API_PREFIX: str = "/api"

    API_KEY: str = "changeme"

    # SQLite
    SQLITE_PATH: str = "./database.sqlite"

    UPLOAD_DIR: str = "./public/uploads"
    SEED_DIR: str = str(PACKAGE_DIR / "data" / "seed")
    ROWS_PER_PAGE: int = 5
    LOG_LEVEL: str = "INFO"
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def upload_path(self) -> Path:
        return Path(self.UPLOAD_DIR).expanduser().resolve()
    @property
    def seed_path(self) -> Path:
        return Path(self.SEED_DIR).expanduser().resolve()
    @property
    def sqlalchemy_url(self) -> str:
        return f"sqlite:///{Path(self.SQLITE_PATH).expanduser()}"

@lru_cache
def get_settings() -> Settings:
    return Settings()
