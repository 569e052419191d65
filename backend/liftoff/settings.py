from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    ENV: str = "local"

    # Storage: "auto" probes PostgreSQL and falls back to the SQLite file
    DB_BACKEND: str = "auto"
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"
    DB_NAME: str = "liftoff"
    POSTGRES_URL: str | None = None
    SQLITE_PATH: str = "liftoff.db"
    DB_CONNECT_TIMEOUT: int = 5
    DB_STATEMENT_TIMEOUT_MS: int = 15000

    # Auth
    SECRET_KEY: str = "dev-secret-change-me"       # set a strong one in prod
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    ALLOW_ORIGINS: str = "*"
    API_VERSION: str = "dev"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def DATABASE_URL(self) -> str:
        if self.POSTGRES_URL:
            return self.POSTGRES_URL
        return (
            f"postgresql+psycopg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def SQLITE_URL(self) -> str:
        return f"sqlite:///{self.SQLITE_PATH}"

@lru_cache
def get_settings() -> Settings:
    return Settings()
